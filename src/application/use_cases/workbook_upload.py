"""Shared upload flow: extension check, decode, parse, typed outcome."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import PurePath
from typing import BinaryIO, Generic, TypeVar

from src.application.ports.workbook_reader import WorkbookReaderPort
from src.domain.constants import ACCEPTED_EXTENSIONS
from src.domain.errors import (
    EmptyResult,
    MalformedInput,
    UnrecognizedFileType,
    WorkbookError,
)
from src.domain.models.cells import Workbook
from src.domain.models.outcome import ParseOutcome, ParseStatus
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger

T = TypeVar("T")

def has_accepted_extension(
    file_name: str,
    accepted_extensions: Iterable[str] = ACCEPTED_EXTENSIONS,
) -> bool:
    """Return True when the file suffix is one of the accepted ones."""
    suffix = PurePath(file_name).suffix.lower()
    return suffix in {ext.lower() for ext in accepted_extensions}


class WorkbookUploadUseCase(ABC, Generic[T]):
    """Base class turning an uploaded workbook into a ``ParseOutcome``.

    Subclasses implement ``_build_records``. Every failure is terminal:
    the outcome carries the status and message and no records.
    """

    dataset_name = "workbook"
    error_prefix = "Error"

    def __init__(
        self,
        reader: WorkbookReaderPort,
        logger=None,
        usage_logger=None,
        accepted_extensions: Iterable[str] = ACCEPTED_EXTENSIONS,
    ) -> None:
        """Initialize the use case.

        Args:
            reader: Port decoding the uploaded file into sheets.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording upload events.
            accepted_extensions: File suffixes accepted for upload.
        """
        self._reader = reader
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._accepted_extensions = tuple(accepted_extensions)

    def execute(
        self,
        source: str | bytes | BinaryIO,
        file_name: str,
    ) -> ParseOutcome[T]:
        """Decode and parse one uploaded workbook.

        Args:
            source: Path, raw bytes or a binary file object.
            file_name: Original file name.

        Returns:
            ParseOutcome[T]: Records on success, otherwise the failure
            status, message and diagnostics.
        """
        try:
            self._check_extension(file_name)
            workbook = self._read(source, file_name)
            records = self._parse(workbook)
        except UnrecognizedFileType as exc:
            return self._failure(
                ParseStatus.UNRECOGNIZED_FILE_TYPE,
                file_name,
                exc,
            )
        except EmptyResult as exc:
            return self._failure(
                ParseStatus.EMPTY,
                file_name,
                exc,
                diagnostics=exc.diagnostics,
            )
        except MalformedInput as exc:
            return self._failure(ParseStatus.MALFORMED, file_name, exc)

        self._logger.info(
            f"Loaded {len(records)} {self.dataset_name} records "
            f"from {file_name}"
        )
        self._usage_logger.info(
            f"upload dataset={self.dataset_name} file={file_name} "
            f"status={ParseStatus.SUCCESS.value} records={len(records)}"
        )
        return ParseOutcome(
            status=ParseStatus.SUCCESS,
            file_name=file_name,
            records=tuple(records),
        )

    def _check_extension(self, file_name: str) -> None:
        if not has_accepted_extension(file_name, self._accepted_extensions):
            allowed = " or ".join(self._accepted_extensions)
            raise UnrecognizedFileType(
                f"Please upload an Excel file ({allowed})"
            )

    def _read(self, source, file_name: str) -> Workbook:
        try:
            return self._reader.read_workbook(source, file_name)
        except Exception as exc:
            raise MalformedInput(f"{self.error_prefix}: {exc}") from exc

    def _parse(self, workbook: Workbook) -> tuple[T, ...]:
        try:
            return self._build_records(workbook)
        except WorkbookError:
            raise
        except Exception as exc:
            raise MalformedInput(f"{self.error_prefix}: {exc}") from exc

    @abstractmethod
    def _build_records(self, workbook: Workbook) -> tuple[T, ...]:
        """Turn the decoded sheets into domain records."""

    def _failure(
        self,
        status: ParseStatus,
        file_name: str,
        exc: Exception,
        diagnostics: tuple[str, ...] = (),
    ) -> ParseOutcome[T]:
        message = str(exc)
        self._logger.warning(
            f"Upload of {file_name} failed ({status.value}): {message}"
        )
        for line in diagnostics:
            self._logger.debug(line)
        self._usage_logger.info(
            f"upload dataset={self.dataset_name} file={file_name} "
            f"status={status.value} records=0"
        )
        return ParseOutcome(
            status=status,
            file_name=file_name,
            message=message,
            diagnostics=tuple(diagnostics),
        )


__all__ = ["WorkbookUploadUseCase", "has_accepted_extension"]
