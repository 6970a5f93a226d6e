"""Sidebar parameter controls."""

from dataclasses import dataclass

import streamlit as st


@dataclass
class SidebarParams:
    """User-controlled parameters from the sidebar."""

    market: str
    override_params: bool
    base_rate_per_year: float
    multiplier_per_year: float
    jump_multiplier_per_year: float
    kink: float
    utilization_override: float | None


def render_sidebar(markets: list[str]) -> SidebarParams:
    """Render sidebar controls and return selected parameters.

    Parameters
    ----------
    markets : list[str]
        Market symbols offered by the active data provider.
    """
    # The on-chain toggle is rendered in app.py before this function is
    # called, since the market list depends on the provider.

    st.sidebar.header("Market")
    market = st.sidebar.selectbox("Market", markets)

    st.sidebar.header("Governance What-If")
    override = st.sidebar.checkbox("Propose New Parameters", value=False)
    base = st.sidebar.slider("Base Rate (% / yr)", 0.0, 10.0, 0.0, 0.25) / 100.0
    multiplier = st.sidebar.slider("Rate at Kink (% / yr)", 0.0, 50.0, 4.0, 0.25) / 100.0
    jump = st.sidebar.slider("Jump Multiplier (% / yr)", 0.0, 500.0, 109.0, 1.0) / 100.0
    kink = st.sidebar.slider("Kink (%)", 1, 100, 80) / 100.0
    st.sidebar.caption(
        "Annual inputs are converted to per-block values exactly as a "
        "governance update would convert them."
    )

    use_util_override = st.sidebar.checkbox("Override Utilization", value=False)
    util_override: float | None = None
    if use_util_override:
        util_override = st.sidebar.slider("Utilization (%)", 0, 100, 80) / 100.0

    return SidebarParams(
        market=market,
        override_params=override,
        base_rate_per_year=base,
        multiplier_per_year=multiplier,
        jump_multiplier_per_year=jump,
        kink=kink,
        utilization_override=util_override,
    )
