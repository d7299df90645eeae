"""Workbook reader backed by pandas.read_excel."""

from io import BytesIO
from pathlib import PurePath
from typing import BinaryIO

import pandas as pd

from src.domain.models.cells import Sheet, Workbook
from src.infrastructure.logging.logger import get_app_logger

DEFAULT_ENGINES = {
    ".xlsx": "openpyxl",
    ".xls": "xlrd",
}


class PandasWorkbookReader:
    """Decode every worksheet of an Excel file into typed sheets.

    Sheets are read without a header row so that row indices match the
    spreadsheet rows the parsers address by position.
    """

    def __init__(
        self,
        logger=None,
        engines: dict[str, str] | None = None,
    ) -> None:
        """Initialize the reader.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
            engines: Optional pandas engine per lower-case file suffix.
        """
        self._logger = logger or get_app_logger()
        self._engines = dict(engines or DEFAULT_ENGINES)

    def read_workbook(
        self,
        source: str | bytes | BinaryIO,
        file_name: str,
    ) -> Workbook:
        """Read all worksheets of the file.

        Args:
            source: Path, raw bytes or a binary file object.
            file_name: Original file name, used to pick the engine.

        Returns:
            Workbook: Worksheets in workbook order.
        """
        engine = self._engines.get(PurePath(file_name).suffix.lower())
        if isinstance(source, (bytes, bytearray)):
            source = BytesIO(source)
        frames = pd.read_excel(
            source,
            sheet_name=None,
            header=None,
            engine=engine,
        )
        sheets = tuple(
            self._frame_to_sheet(str(name), frame)
            for name, frame in frames.items()
        )
        self._logger.info(
            f"Read {len(sheets)} sheets from {file_name} (engine={engine})"
        )
        return sheets

    @staticmethod
    def _frame_to_sheet(name: str, frame: pd.DataFrame) -> Sheet:
        """Convert a header-less frame into a sheet of cells."""
        values = frame.astype(object).values.tolist()
        return Sheet.from_values(name, values)


__all__ = ["PandasWorkbookReader", "DEFAULT_ENGINES"]
