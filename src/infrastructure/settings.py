"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from datetime import date
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

from src.domain.constants import DEFAULT_CUTOFF_DATE
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class DashboardSettings:
    """Settings for the finance dashboard.

    Attributes:
        cutoff_date: Snapshot date for loan reconstruction.
        timeline_end: Optional last month of the debt timeline.
        debt_workbook: Optional path to a loan workbook loaded at startup.
        revenue_workbook: Optional path to a revenue ledger loaded at
            startup.
    """

    cutoff_date: date = DEFAULT_CUTOFF_DATE
    timeline_end: Optional[date] = None
    debt_workbook: Optional[Path] = None
    revenue_workbook: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "DashboardSettings":
        """Build settings from environment variables.

        Returns:
            DashboardSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        cutoff = cls._parse_date(
            os.getenv("DASHBOARD_CUTOFF_DATE"),
            "DASHBOARD_CUTOFF_DATE",
            logger=logger,
        )
        timeline_end = cls._parse_date(
            os.getenv("DASHBOARD_TIMELINE_END"),
            "DASHBOARD_TIMELINE_END",
            logger=logger,
        )
        return cls(
            cutoff_date=cutoff or DEFAULT_CUTOFF_DATE,
            timeline_end=timeline_end,
            debt_workbook=cls._optional_path(
                os.getenv("DEBT_WORKBOOK"),
                logger=logger,
            ),
            revenue_workbook=cls._optional_path(
                os.getenv("REVENUE_WORKBOOK"),
                logger=logger,
            ),
        )

    @staticmethod
    def _parse_date(raw: str | None, name: str, logger) -> date | None:
        """Parse an ISO date, logging and ignoring invalid values.

        Args:
            raw: Raw environment value.
            name: Variable name used in the warning.
            logger: Logger used for warnings.

        Returns:
            date | None: Parsed date, or None when unset or invalid.
        """
        if raw is None or not raw.strip():
            return None
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            logger.warning(f"Ignoring invalid {name} value: {raw!r}")
            return None

    @classmethod
    def _optional_path(cls, raw: str | None, logger) -> Path | None:
        if raw is None or not raw.strip():
            return None
        return cls._normalize_path(raw.strip(), logger=logger)

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize a workbook path or ``file://`` URI.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path: Absolute filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"Workbook file does not exist at {path}")
        return path


__all__ = ["DashboardSettings"]
