"""Streamlit rendering for the debt dashboard."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

import altair as alt
import streamlit as st

from src.domain.models.dashboard import DebtDashboardView
from src.domain.models.debt import (
    LoanPosition,
    PaymentScheduleBucket,
    TimelinePoint,
)
from src.domain.services.ratios import paid_off_percent

PAYDOWN_COLOR = "#ef4444"


def _format_currency(value: Decimal) -> str:
    """Format euro amounts without decimals."""
    return f"€{value:,.0f}"


def _format_date(value: date | None) -> str:
    """Format a payoff date as ``Mar 2030``."""
    if value is None:
        return "—"
    return value.strftime("%b %Y")


def _loan_color_scale(positions: Sequence[LoanPosition]) -> alt.Scale:
    """Return a color scale pinning each loan to its configured color."""
    return alt.Scale(
        domain=[position.name for position in positions],
        range=[position.color for position in positions],
    )


def _prepare_timeline_totals(
    timeline: Sequence[TimelinePoint],
) -> list[dict[str, str | float | int]]:
    """Prepare one row per month with the total outstanding balance."""
    return [
        {
            "month": point.label,
            "order": index,
            "total": float(point.total),
            "total_label": _format_currency(point.total),
        }
        for index, point in enumerate(timeline)
    ]


def _prepare_timeline_by_loan(
    timeline: Sequence[TimelinePoint],
    positions: Sequence[LoanPosition],
) -> list[dict[str, str | float | int]]:
    """Prepare long-format balances for the stacked per-loan chart.

    Args:
        timeline: Month-end balances.
        positions: Loans in stacking order.

    Returns:
        Rows with month label, month order, loan name and balance.
    """
    data: list[dict[str, str | float | int]] = []
    for index, point in enumerate(timeline):
        for position in positions:
            balance = point.balances.get(position.name, Decimal("0"))
            data.append(
                {
                    "month": point.label,
                    "order": index,
                    "loan": position.name,
                    "balance": float(balance),
                    "balance_label": _format_currency(balance),
                }
            )
    return data


def _prepare_schedule_rows(
    schedule: Sequence[PaymentScheduleBucket],
) -> list[dict[str, str | float | int]]:
    """Prepare long-format installments for the stacked payment bars."""
    data: list[dict[str, str | float | int]] = []
    for index, bucket in enumerate(schedule):
        for loan, amount in bucket.by_loan.items():
            data.append(
                {
                    "month": bucket.label,
                    "order": index,
                    "loan": loan,
                    "amount": float(amount),
                    "amount_label": _format_currency(amount),
                }
            )
    return data


def _prepare_details_rows(view: DebtDashboardView) -> list[dict[str, str]]:
    """Build the loan details table, closed by a TOTAL row."""
    rows = []
    for position in view.positions:
        paid = paid_off_percent(
            position.original_amount,
            position.current_balance,
        )
        rows.append(
            {
                "Loan": position.name,
                "Original": _format_currency(position.original_amount),
                "Balance Now": _format_currency(position.current_balance),
                "Paid Off": f"{paid:.0f}%",
                "Monthly": _format_currency(position.monthly_payment),
                "Ends": _format_date(position.end_date),
            }
        )
    metrics = view.metrics
    rows.append(
        {
            "Loan": "TOTAL",
            "Original": _format_currency(metrics.total_original),
            "Balance Now": _format_currency(metrics.total_debt),
            "Paid Off": f"{metrics.paid_off_percent:.0f}%",
            "Monthly": _format_currency(metrics.monthly_payment),
            "Ends": _format_date(metrics.final_payoff),
        }
    )
    return rows


def _render_metrics(view: DebtDashboardView) -> None:
    metrics = view.metrics
    cutoff_label = _format_date(view.cutoff)
    debt_col, paid_col, interest_col, active_col, free_col = st.columns(5)
    debt_col.metric(
        f"Total Debt ({cutoff_label})",
        _format_currency(metrics.total_debt),
    )
    debt_col.caption(
        f"of {_format_currency(metrics.total_original)} original"
    )
    paid_col.metric("Paid Off", f"{metrics.paid_off_percent:.1f}%")
    paid_col.progress(
        min(max(float(metrics.paid_off_percent) / 100.0, 0.0), 1.0)
    )
    interest_col.metric(
        "Interest Remaining",
        _format_currency(metrics.remaining_interest),
    )
    active_col.metric("Active Loans", str(metrics.active_loans))
    free_col.metric("Debt Free", _format_date(metrics.final_payoff))


def _render_paydown_chart(view: DebtDashboardView) -> None:
    data = _prepare_timeline_totals(view.timeline)
    if not data:
        st.info("No timeline data available.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_area(
        color=PAYDOWN_COLOR,
        opacity=0.3,
        line={"color": PAYDOWN_COLOR},
    ).encode(
        x=alt.X("month:N", sort=None, title=None),
        y=alt.Y("total:Q", title="Balance (€)"),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("total_label:N", title="Total"),
        ],
    ).properties(height=280)
    st.subheader(
        f"Debt Paydown ({data[0]['month']} → {data[-1]['month']})"
    )
    st.altair_chart(chart, width="stretch")


def _render_loan_breakdown(view: DebtDashboardView) -> None:
    st.subheader(f"Loan Breakdown (as of {_format_date(view.cutoff)})")
    total = view.metrics.total_debt
    for position in view.positions:
        share = float(position.current_balance / total) if total else 0.0
        st.markdown(
            f"**{position.name}**: "
            f"{_format_currency(position.current_balance)}"
        )
        st.progress(min(max(share, 0.0), 1.0))
        st.caption(
            f"{_format_currency(position.monthly_payment)}/mo · "
            f"Ends: {_format_date(position.end_date)}"
        )


def _render_balance_by_loan(view: DebtDashboardView) -> None:
    data = _prepare_timeline_by_loan(view.timeline, view.positions)
    st.subheader(f"Balance by Loan ({_format_date(view.cutoff)} onwards)")
    if not data:
        st.info("No timeline data available.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_area(opacity=0.6).encode(
        x=alt.X("month:N", sort=None, title=None),
        y=alt.Y("balance:Q", stack="zero", title="Balance (€)"),
        color=alt.Color(
            "loan:N",
            scale=_loan_color_scale(view.positions),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("loan:N"),
            alt.Tooltip("balance_label:N", title="Balance"),
        ],
    ).properties(height=400)
    st.altair_chart(chart, width="stretch")


def _render_payment_schedule(view: DebtDashboardView) -> None:
    data = _prepare_schedule_rows(view.payment_schedule)
    st.subheader(f"Monthly Payments ({_format_date(view.cutoff)} onwards)")
    if not data:
        st.info("No payments due after the cutoff.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_bar().encode(
        x=alt.X("month:N", sort=None, title=None),
        y=alt.Y("amount:Q", stack="zero", title="Payment (€)"),
        color=alt.Color(
            "loan:N",
            scale=_loan_color_scale(view.positions),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("loan:N"),
            alt.Tooltip("amount_label:N", title="Payment"),
        ],
    ).properties(height=400)
    st.altair_chart(chart, width="stretch")


def render_debt_dashboard(view: DebtDashboardView) -> None:
    """Render the metric cards followed by the dashboard tabs."""
    _render_metrics(view)
    overview, timeline, schedule, details = st.tabs(
        ["Overview", "Timeline", "Payment Schedule", "Details"]
    )
    with overview:
        chart_col, breakdown_col = st.columns(2)
        with chart_col:
            _render_paydown_chart(view)
        with breakdown_col:
            _render_loan_breakdown(view)
    with timeline:
        _render_balance_by_loan(view)
    with schedule:
        _render_payment_schedule(view)
    with details:
        st.subheader(f"Loan Details (as of {_format_date(view.cutoff)})")
        st.dataframe(
            _prepare_details_rows(view),
            width="stretch",
            hide_index=True,
        )


__all__ = ["render_debt_dashboard"]
