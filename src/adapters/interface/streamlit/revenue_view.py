"""Streamlit rendering for the revenue dashboard."""

from collections.abc import Sequence
from decimal import Decimal

import altair as alt
import streamlit as st

from src.application.use_cases.get_revenue_dashboard import (
    GetRevenueDashboardUseCase,
)
from src.domain.constants import CATEGORY_COLORS, LOCATION_COLORS
from src.domain.models.dashboard import RevenueDashboardView
from src.domain.models.revenue import (
    CategoryCompositionPoint,
    Granularity,
    Location,
    LocationBreakdown,
    LocationFilter,
    MonthlyLedgerEntry,
    PeriodFilter,
    PeriodFilterKind,
    RevenueBucket,
    RevenueCategory,
)
from src.domain.services.ratios import safe_percent
from src.domain.services.revenue_aggregation import (
    default_period_filter,
    period_filter_options,
)

GRANULARITY_OPTIONS = {
    "Monthly": Granularity.MONTHLY,
    "Quarterly": Granularity.QUARTERLY,
    "Yearly": Granularity.YEARLY,
}

LOCATION_FILTER_OPTIONS = {
    "Both Locations": LocationFilter.BOTH,
    "Malaga Palace": LocationFilter.PALACE,
    "Malaga Terrace": LocationFilter.TERRACE,
}

PERIOD_KIND_OPTIONS = {
    "Year": PeriodFilterKind.YEAR,
    "Quarter": PeriodFilterKind.QUARTER,
    "Month": PeriodFilterKind.MONTH,
}


def _format_currency(value: Decimal) -> str:
    """Format euro amounts without decimals."""
    return f"€{value:,.0f}"


def _prepare_evolution_rows(
    series: Sequence[RevenueBucket],
) -> list[dict[str, str | float | int]]:
    """Prepare long-format location amounts for the stacked bars."""
    data: list[dict[str, str | float | int]] = []
    for index, bucket in enumerate(series):
        for location in (Location.PALACE, Location.TERRACE):
            amount = bucket.by_location.get(location, Decimal("0"))
            data.append(
                {
                    "period": bucket.label,
                    "order": index,
                    "location": location.display_name,
                    "amount": float(amount),
                    "amount_label": _format_currency(amount),
                }
            )
    return data


def _prepare_evolution_table(
    series: Sequence[RevenueBucket],
) -> list[dict[str, str]]:
    """Build the period table with each location's share of the period.

    The period total shown is the sum of the two location subtotals.
    """
    rows = []
    for bucket in series:
        located = bucket.palace + bucket.terrace
        rows.append(
            {
                "Period": bucket.label,
                "Total": _format_currency(located),
                "Malaga Palace": _format_currency(bucket.palace),
                "Palace %": f"{safe_percent(bucket.palace, located):.1f}%",
                "Malaga Terrace": _format_currency(bucket.terrace),
                "Terrace %": f"{safe_percent(bucket.terrace, located):.1f}%",
            }
        )
    return rows


def _prepare_category_rows(
    points: Sequence[CategoryCompositionPoint],
) -> list[dict[str, str | float | int]]:
    """Prepare long-format category amounts, skipping zero amounts."""
    data: list[dict[str, str | float | int]] = []
    for index, point in enumerate(points):
        for category, amount in point.amounts.items():
            if amount == 0:
                continue
            data.append(
                {
                    "period": point.label,
                    "order": index,
                    "category": category.display_name,
                    "amount": float(amount),
                    "amount_label": _format_currency(amount),
                }
            )
    return data


def _prepare_donut_rows(
    breakdown: LocationBreakdown,
) -> list[dict[str, str | float]]:
    """Prepare the category slices of one location for a donut chart."""
    return [
        {
            "category": item.category.display_name,
            "amount": float(item.amount),
            "amount_label": _format_currency(item.amount),
            "share_label": f"{item.share_percent:.1f}%",
        }
        for item in breakdown.slices
    ]


def _category_scale() -> alt.Scale:
    return alt.Scale(
        domain=[category.display_name for category in RevenueCategory],
        range=[CATEGORY_COLORS[category] for category in RevenueCategory],
    )


def _location_scale() -> alt.Scale:
    locations = (Location.PALACE, Location.TERRACE)
    return alt.Scale(
        domain=[location.display_name for location in locations],
        range=[LOCATION_COLORS[location] for location in locations],
    )


def _select_granularity(label: str, key: str) -> Granularity:
    choice = st.radio(
        label,
        list(GRANULARITY_OPTIONS),
        horizontal=True,
        key=key,
    )
    return GRANULARITY_OPTIONS[choice]


def _select_period_filter(
    entries: Sequence[MonthlyLedgerEntry],
) -> PeriodFilter | None:
    """Ask for the breakdown period; the latest option is preselected."""
    default = default_period_filter(entries)
    if default is None:
        return None
    kind_label = st.radio(
        "Breakdown period",
        list(PERIOD_KIND_OPTIONS),
        horizontal=True,
        key="revenue_period_kind",
    )
    kind = PERIOD_KIND_OPTIONS[kind_label]
    options = period_filter_options(entries, kind)
    if not options:
        return default
    value = st.selectbox(
        "Period",
        options,
        index=len(options) - 1,
        key=f"revenue_period_value_{kind.value}",
    )
    return PeriodFilter(kind=kind, value=value)


def _render_evolution(view: RevenueDashboardView) -> None:
    data = _prepare_evolution_rows(view.display_series)
    if not data:
        st.info("No revenue data available.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_bar().encode(
        x=alt.X("period:N", sort=None, title=None),
        y=alt.Y("amount:Q", stack="zero", title="Revenue (€)"),
        color=alt.Color(
            "location:N",
            scale=_location_scale(),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("period:N"),
            alt.Tooltip("location:N"),
            alt.Tooltip("amount_label:N", title="Revenue"),
        ],
    ).properties(height=400)
    st.altair_chart(chart, width="stretch")
    st.dataframe(
        _prepare_evolution_table(view.display_series),
        width="stretch",
        hide_index=True,
    )


def _render_category_composition(view: RevenueDashboardView) -> None:
    data = _prepare_category_rows(view.category_series)
    if not data:
        st.info("No category data for this selection.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_bar().encode(
        x=alt.X("period:N", sort=None, title=None),
        y=alt.Y("amount:Q", stack="zero", title="Revenue (€)"),
        color=alt.Color(
            "category:N",
            scale=_category_scale(),
            legend=alt.Legend(orient="bottom", title=None, columns=4),
        ),
        tooltip=[
            alt.Tooltip("period:N"),
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N", title="Revenue"),
        ],
    ).properties(height=400)
    st.altair_chart(chart, width="stretch")


def _render_donut(breakdown: LocationBreakdown, chart_size: int = 280) -> None:
    """Render one location's category mix as a donut chart."""
    st.markdown(f"**{breakdown.location.display_name}**")
    data = _prepare_donut_rows(breakdown)
    if not data:
        st.info("No revenue for this period.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.3,
        cornerRadius=6,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=_category_scale(),
            legend=alt.Legend(orient="bottom", title=None, columns=2),
        ),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N", title="Revenue"),
            alt.Tooltip("share_label:N", title="Share"),
        ],
    ).properties(width=chart_size, height=chart_size)
    st.altair_chart(chart, width="content")
    st.caption(f"Total: {_format_currency(breakdown.total)}")


def _render_location_breakdowns(view: RevenueDashboardView) -> None:
    breakdowns = view.breakdowns
    if breakdowns is None:
        st.info("No revenue data available.")
        return
    palace_col, total_col, terrace_col = st.columns(3)
    with palace_col:
        _render_donut(breakdowns.palace)
    with total_col:
        st.metric(
            "Total Revenue",
            _format_currency(breakdowns.grand_total),
        )
        st.caption(
            f"Palace {breakdowns.palace_share_percent:.1f}% · "
            f"Terrace {breakdowns.terrace_share_percent:.1f}%"
        )
    with terrace_col:
        _render_donut(breakdowns.terrace)


def render_revenue_dashboard(
    entries: Sequence[MonthlyLedgerEntry],
    use_case: GetRevenueDashboardUseCase,
) -> RevenueDashboardView:
    """Render the revenue widgets for the current selector state.

    Args:
        entries: Monthly ledger entries of the loaded file.
        use_case: Use case computing the series for the selections.

    Returns:
        RevenueDashboardView: View that was rendered.
    """
    st.subheader("Revenue Evolution by Location")
    granularity = _select_granularity("View", key="revenue_granularity")
    evolution_slot = st.container()

    st.subheader("Revenue Composition by Category")
    category_granularity = _select_granularity(
        "Category view",
        key="revenue_category_granularity",
    )
    location_label = st.radio(
        "Location",
        list(LOCATION_FILTER_OPTIONS),
        horizontal=True,
        key="revenue_location_filter",
    )
    category_slot = st.container()

    st.subheader("Revenue Breakdown by Location")
    period_filter = _select_period_filter(entries)

    view = use_case.execute(
        entries,
        granularity=granularity,
        category_granularity=category_granularity,
        location_filter=LOCATION_FILTER_OPTIONS[location_label],
        period_filter=period_filter,
    )
    with evolution_slot:
        _render_evolution(view)
    with category_slot:
        _render_category_composition(view)
    _render_location_breakdowns(view)
    return view


__all__ = [
    "GRANULARITY_OPTIONS",
    "LOCATION_FILTER_OPTIONS",
    "PERIOD_KIND_OPTIONS",
    "render_revenue_dashboard",
]
