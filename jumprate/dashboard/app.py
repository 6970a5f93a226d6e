"""Jump Rate Model Dashboard — Main Streamlit entry point."""

import logging
import os
from pathlib import Path

import streamlit as st

# Load .env file if present (for ETH_RPC_URL, etc.)
_env_path = Path(__file__).resolve().parents[2] / ".env"
if _env_path.exists():
    for line in _env_path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, _, value = line.partition("=")
            os.environ.setdefault(key.strip(), value.strip())

from jumprate.dashboard.components.sidebar import render_sidebar
from jumprate.dashboard.tabs.parameters import render_parameters
from jumprate.dashboard.tabs.rates import render_rates
from jumprate.data.provider_factory import create_model, create_provider
from jumprate.protocol.errors import RateModelError
from jumprate.protocol.fixed_point import to_scaled
from jumprate.protocol.model import JumpRateModel

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))


def main() -> None:
    st.set_page_config(
        page_title="Jump Rate Model Dashboard",
        page_icon="📈",
        layout="wide",
    )

    st.title("Jump Rate Model Dashboard")
    st.caption("Kinked interest rate curves for lending-pool markets")

    st.sidebar.header("Data Source")
    use_onchain = st.sidebar.checkbox("Use On-Chain Data", value=False, key="use_onchain")
    provider = create_provider(use_onchain=use_onchain)

    if use_onchain and hasattr(provider, "refresh"):
        if st.sidebar.button("Refresh On-Chain Data"):
            provider.refresh()  # type: ignore[attr-defined]
            st.rerun()

    params = render_sidebar(provider.list_markets())
    snapshot = provider.get_market_snapshot(params.market)
    try:
        model = create_model(provider, params.market)
    except RateModelError as exc:
        st.error(f"Cannot load {params.market} rate model: {exc}")
        return

    if params.override_params:
        try:
            model = JumpRateModel(
                base_rate_per_year=to_scaled(params.base_rate_per_year),
                multiplier_per_year=to_scaled(params.multiplier_per_year),
                jump_multiplier_per_year=to_scaled(params.jump_multiplier_per_year),
                kink=to_scaled(params.kink),
                owner=model.owner,
                periods_per_year=model.periods_per_year,
            )
        except RateModelError as exc:
            st.sidebar.error(f"Proposed parameters rejected: {exc}")

    tab1, tab2 = st.tabs(["Interest Rates", "Parameters"])

    with tab1:
        try:
            render_rates(params.market, model, snapshot, params.utilization_override)
        except RateModelError as exc:
            st.error(f"Cannot compute rates for this snapshot: {exc}")

    with tab2:
        render_parameters(model)


if __name__ == "__main__":
    main()
