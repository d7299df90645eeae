"""Port for decoding uploaded spreadsheet files into sheets of cells."""

from typing import BinaryIO, Protocol

from src.domain.models.cells import Workbook


class WorkbookReaderPort(Protocol):
    """Port turning an uploaded file into typed worksheets.

    Implementations decode the file format; the engine only ever sees
    ``Sheet`` grids.
    """

    def read_workbook(
        self,
        source: str | bytes | BinaryIO,
        file_name: str,
    ) -> Workbook:
        """Decode every worksheet of the file.

        Args:
            source: Path, raw bytes or a binary file object.
            file_name: Original file name, used to pick the decoder.

        Returns:
            Workbook: Worksheets in workbook order.
        """


__all__ = ["WorkbookReaderPort"]
