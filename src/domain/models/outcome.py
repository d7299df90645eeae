"""Typed outcome of a workbook upload."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ParseStatus(Enum):
    """Result category of an upload."""

    SUCCESS = "success"
    EMPTY = "empty"
    MALFORMED = "malformed"
    UNRECOGNIZED_FILE_TYPE = "unrecognized_file_type"


@dataclass(frozen=True)
class ParseOutcome(Generic[T]):
    """Records parsed from one upload, or the reason there are none.

    Attributes:
        status: Result category.
        file_name: Name of the uploaded file.
        records: Parsed records; empty unless ``status`` is SUCCESS.
        message: Human-readable error message for failures.
        diagnostics: Raw row excerpt attached to empty revenue parses.
    """

    status: ParseStatus
    file_name: str
    records: tuple[T, ...] = ()
    message: str | None = None
    diagnostics: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.SUCCESS


__all__ = ["ParseStatus", "ParseOutcome"]
