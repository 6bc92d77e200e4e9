"""Streamlit dashboard entry point."""

import asyncio
from collections.abc import Sequence
from decimal import Decimal

import altair as alt
import streamlit as st

from empire_ledger.domain.models.ownership import OwnershipBreakdown
from empire_ledger.domain.models.records import COLLECTION_CATEGORIES
from empire_ledger.domain.models.snapshot import AggregateSnapshot
from empire_ledger.domain.services.wealth_tiers import get_next_tier_progress
from empire_ledger.infrastructure.container import EmpireEngine, build_engine
from empire_ledger.infrastructure.logging.logger import get_usage_logger


COMPONENT_LABELS = (
    ("Cash", "total_cash"),
    ("Stocks", "total_stocks"),
    ("Crypto", "total_crypto"),
    ("Bonds", "total_bonds"),
    ("Other Investments", "total_other_investments"),
    ("Property Equity", "total_property_equity"),
    ("Lifestyle", "total_lifestyle_value"),
    ("Ownership", "total_ownership_value"),
)

CATEGORY_TITLES = {
    "stocks": "Stocks",
    "cryptoAssets": "Crypto",
    "bonds": "Bonds",
    "otherInvestments": "Other Investments",
    "properties": "Properties",
    "lifestyleItems": "Lifestyle Items",
}


@st.cache_resource(show_spinner=False)
def _load_engine() -> EmpireEngine:
    """Build the engine once per Streamlit server process."""
    return build_engine()


def _format_currency(value: Decimal) -> str:
    """Format currency values for display."""
    return f"${value:,.2f}"


def _prepare_component_data(
    snapshot: AggregateSnapshot,
) -> list[dict[str, str | float]]:
    """Prepare donut chart data from the positive net worth components.

    Args:
        snapshot: Current aggregate snapshot.

    Returns:
        Altair-ready rows with labels and shares.
    """
    amounts = [
        (label, getattr(snapshot, attribute))
        for label, attribute in COMPONENT_LABELS
    ]
    positive = [(label, amount) for label, amount in amounts if amount > 0]
    total = sum((amount for _, amount in positive), start=Decimal("0"))
    data: list[dict[str, str | float]] = []
    for label, amount in positive:
        share = (amount / total) * Decimal("100") if total else Decimal("0")
        data.append(
            {
                "category": label,
                "amount": float(amount),
                "amount_label": _format_currency(amount),
                "share_label": f"{share:.1f}%",
            }
        )
    return data


def _render_component_chart(
    snapshot: AggregateSnapshot,
    chart_size: int = 360,
    palette: Sequence[str] | None = None,
) -> None:
    """Render a donut chart of the net worth components."""
    data = _prepare_component_data(snapshot)
    if not data:
        st.info("No positive net worth components to chart.")
        return

    palette_scale = list(
        palette
        or [
            "#1b9aaa",
            "#2e7d32",
            "#f4a261",
            "#e76f51",
            "#457b9d",
            "#f6c453",
            "#6c8ead",
            "#a0c4ff",
        ]
    )
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
        stroke="#0f1115",
        strokeWidth=2,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=palette_scale),
            legend=alt.Legend(
                orient="bottom",
                title=None,
                direction="horizontal",
                columns=4,
            ),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.25)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
        color="#f5f7ff",
    ).encode(text="amount_label:N")

    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.subheader("Net Worth Composition")
    st.altair_chart(chart, width="stretch")


def _ownership_rows(breakdown: OwnershipBreakdown) -> list[dict[str, str]]:
    """Return table rows for owned specialty assets."""
    rows = []
    if breakdown.f1_team.owned:
        rows.append(
            {
                "Asset": f"Formula 1: {breakdown.f1_team.name}",
                "Value": _format_currency(breakdown.f1_team.value),
            }
        )
    for horse in breakdown.horses.items:
        rows.append(
            {
                "Asset": f"Horse: {horse.name}",
                "Value": _format_currency(horse.value),
            }
        )
    if breakdown.sports_team.owned:
        rows.append(
            {
                "Asset": f"Sports team: {breakdown.sports_team.name}",
                "Value": _format_currency(breakdown.sports_team.value),
            }
        )
    return rows


def _run_manual_refresh(engine: EmpireEngine) -> None:
    get_usage_logger().info("Manual asset refresh requested from dashboard")
    result = asyncio.run(
        engine.coordinator.trigger_refresh(view="net_worth", force=True)
    )
    st.toast(result.message)


def _run_reset(engine: EmpireEngine) -> None:
    get_usage_logger().info("Complete game reset requested from dashboard")
    report = engine.choreographer.perform_complete_reset()
    st.toast(report.message)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Business Empire Net Worth", layout="wide")
    st.title("Business Empire Net Worth")

    engine = _load_engine()

    if st.sidebar.button("Refresh assets"):
        _run_manual_refresh(engine)
    if st.sidebar.button("Reset game", type="secondary"):
        _run_reset(engine)

    snapshot = engine.breakdown.execute()
    progress = get_next_tier_progress(snapshot.total_net_worth)
    state = engine.coordinator.state
    if state.stale:
        st.caption("Totals are being updated...")

    net_worth_col, cash_col, tier_col = st.columns(3)
    net_worth_col.metric("Net Worth", _format_currency(snapshot.total_net_worth))
    cash_col.metric("Cash", _format_currency(snapshot.total_cash))
    tier_col.metric("Wealth Tier", progress.current_tier.name)
    if progress.next_tier is not None:
        st.progress(
            float(progress.progress) / 100,
            text=f"{progress.progress:.0f}% towards {progress.next_tier.name}",
        )

    chart_col, ownership_col = st.columns(2)
    with chart_col:
        _render_component_chart(snapshot)
    with ownership_col:
        st.subheader("Ownership")
        rows = _ownership_rows(engine.registry.get_ownership_breakdown())
        if rows:
            st.dataframe(rows, width="stretch", hide_index=True)
        else:
            st.info("No racing teams, horses, or franchises owned yet.")

    for category in COLLECTION_CATEGORIES:
        records = engine.ledger.records(category)
        if not records:
            continue
        st.subheader(CATEGORY_TITLES[category.value])
        st.dataframe(
            [record.to_payload() for record in records],
            width="stretch",
            hide_index=True,
        )


if __name__ == "__main__":  # pragma: no cover
    main()
