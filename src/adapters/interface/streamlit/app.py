"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
from pathlib import Path

import streamlit as st

from src.adapters.interface.streamlit.debt_view import render_debt_dashboard
from src.adapters.interface.streamlit.revenue_view import (
    render_revenue_dashboard,
)
from src.domain.constants import ACCEPTED_EXTENSIONS, DIAGNOSTIC_ROW_COUNT
from src.domain.models.dashboard import DebtDashboardView
from src.domain.models.debt import LoanPosition
from src.domain.models.outcome import ParseOutcome
from src.domain.models.revenue import MonthlyLedgerEntry
from src.infrastructure.container import (
    build_debt_dashboard_use_case,
    build_load_debt_use_case,
    build_load_revenue_use_case,
    build_revenue_dashboard_use_case,
    build_settings,
)
from src.infrastructure.settings import DashboardSettings

DEBT_STATE_KEY = "debt_outcome"
REVENUE_STATE_KEY = "revenue_outcome"


def _fetch_debt_outcome(
    payload: bytes,
    file_name: str,
    cutoff: date,
) -> ParseOutcome[LoanPosition]:
    """Parse a loan workbook and reconstruct its loans at the cutoff."""
    settings = DashboardSettings(cutoff_date=cutoff)
    use_case = build_load_debt_use_case(settings=settings)
    return use_case.execute(payload, file_name)


@st.cache_data(show_spinner=False)
def _load_debt_outcome(
    payload: bytes,
    file_name: str,
    cutoff: date,
) -> ParseOutcome[LoanPosition]:
    """Cached wrapper around _fetch_debt_outcome for Streamlit sessions."""
    return _fetch_debt_outcome(payload, file_name, cutoff)


def _fetch_revenue_outcome(
    payload: bytes,
    file_name: str,
) -> ParseOutcome[MonthlyLedgerEntry]:
    """Parse a revenue ledger workbook."""
    use_case = build_load_revenue_use_case()
    return use_case.execute(payload, file_name)


@st.cache_data(show_spinner=False)
def _load_revenue_outcome(
    payload: bytes,
    file_name: str,
) -> ParseOutcome[MonthlyLedgerEntry]:
    """Cached wrapper around _fetch_revenue_outcome."""
    return _fetch_revenue_outcome(payload, file_name)


def _build_debt_view(
    positions: Sequence[LoanPosition],
    settings: DashboardSettings,
) -> DebtDashboardView:
    """Compute the debt dashboard for the loaded loans."""
    use_case = build_debt_dashboard_use_case(settings=settings)
    return use_case.execute(positions, timeline_end=settings.timeline_end)


def _read_configured_workbook(path: Path | None) -> tuple[bytes, str] | None:
    """Return the bytes and name of a workbook configured at startup."""
    if path is None or not path.is_file():
        return None
    return path.read_bytes(), path.name


def _uploader_types() -> list[str]:
    return [extension.lstrip(".") for extension in ACCEPTED_EXTENSIONS]


def _render_failure(outcome: ParseOutcome) -> None:
    """Show the upload error and, when present, the raw row excerpt."""
    st.error(outcome.message or "The file could not be loaded.")
    if outcome.diagnostics:
        st.caption(f"First {DIAGNOSTIC_ROW_COUNT} rows of file:")
        st.code("\n".join(outcome.diagnostics), language=None)


def _current_debt_outcome(
    settings: DashboardSettings,
) -> ParseOutcome[LoanPosition] | None:
    """Load the uploaded loan file, or the configured one on first run."""
    uploaded = st.file_uploader(
        "Upload Loans File",
        type=_uploader_types(),
        key="debt_upload",
    )
    if uploaded is not None:
        st.session_state[DEBT_STATE_KEY] = _load_debt_outcome(
            uploaded.getvalue(),
            uploaded.name,
            settings.cutoff_date,
        )
    elif DEBT_STATE_KEY not in st.session_state:
        configured = _read_configured_workbook(settings.debt_workbook)
        if configured is not None:
            payload, file_name = configured
            st.session_state[DEBT_STATE_KEY] = _load_debt_outcome(
                payload,
                file_name,
                settings.cutoff_date,
            )
    return st.session_state.get(DEBT_STATE_KEY)


def _current_revenue_outcome(
    settings: DashboardSettings,
) -> ParseOutcome[MonthlyLedgerEntry] | None:
    """Load the uploaded ledger, or the configured one on first run."""
    uploaded = st.file_uploader(
        "Upload Excel File",
        type=_uploader_types(),
        key="revenue_upload",
    )
    if uploaded is not None:
        st.session_state[REVENUE_STATE_KEY] = _load_revenue_outcome(
            uploaded.getvalue(),
            uploaded.name,
        )
    elif REVENUE_STATE_KEY not in st.session_state:
        configured = _read_configured_workbook(settings.revenue_workbook)
        if configured is not None:
            payload, file_name = configured
            st.session_state[REVENUE_STATE_KEY] = _load_revenue_outcome(
                payload,
                file_name,
            )
    return st.session_state.get(REVENUE_STATE_KEY)


def _render_debt_page(settings: DashboardSettings) -> None:
    st.header("💳 Debt Dashboard")
    outcome = _current_debt_outcome(settings)
    if outcome is None:
        st.info(
            "Upload an Excel file with one amortization schedule per sheet."
        )
        return
    if not outcome.ok:
        _render_failure(outcome)
        return
    st.caption(f"📄 {outcome.file_name} ({len(outcome.records)} loans)")
    render_debt_dashboard(_build_debt_view(outcome.records, settings))


def _render_revenue_page(settings: DashboardSettings) -> None:
    st.header("Revenue Dashboard")
    outcome = _current_revenue_outcome(settings)
    if outcome is None:
        st.info("Upload the monthly revenue ledger (.xlsx or .xls).")
        return
    if not outcome.ok:
        _render_failure(outcome)
        return
    st.caption(f"📄 {outcome.file_name} ({len(outcome.records)} months)")
    render_revenue_dashboard(
        outcome.records,
        build_revenue_dashboard_use_case(),
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Innovation Campus Finance", layout="wide")
    st.title("Innovation Campus Finance")

    settings = build_settings()
    page = st.sidebar.selectbox("Page", ["Revenue", "Debt"])
    if page == "Debt":
        _render_debt_page(settings)
    else:
        _render_revenue_page(settings)


if __name__ == "__main__":  # pragma: no cover
    main()
