"""Error taxonomy for workbook uploads.

Every error is terminal for the upload that raised it; a later upload starts
from a clean state.
"""


class WorkbookError(Exception):
    """Base class for upload failures."""


class EmptyResult(WorkbookError):
    """The workbook parsed but produced no usable records.

    Attributes:
        diagnostics: Raw excerpt of the first rows, when available.
    """

    def __init__(self, message: str, diagnostics: tuple[str, ...] = ()):
        super().__init__(message)
        self.diagnostics = diagnostics


class MalformedInput(WorkbookError):
    """Reading the grid or coercing its cells raised."""


class UnrecognizedFileType(WorkbookError):
    """The file extension is outside the accepted set."""


__all__ = [
    "WorkbookError",
    "EmptyResult",
    "MalformedInput",
    "UnrecognizedFileType",
]
