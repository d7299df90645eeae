"""Application ports package."""

from .workbook_reader import WorkbookReaderPort

__all__ = ["WorkbookReaderPort"]
