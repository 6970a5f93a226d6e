"""Interest Rates page — rate curve, current rates and sensitivity."""

import pandas as pd
import streamlit as st

from jumprate.dashboard.components.charts import rate_curve_chart
from jumprate.data.interfaces import MarketSnapshot
from jumprate.protocol.fixed_point import from_scaled, to_scaled
from jumprate.protocol.interest_rate import borrow_rate_at, supply_rate_at
from jumprate.protocol.model import JumpRateModel


def render_rates(
    market: str,
    model: JumpRateModel,
    snapshot: MarketSnapshot,
    utilization_override: float | None = None,
) -> None:
    """Render the interest rates page."""
    st.header(f"{market} Interest Rate Curve")

    rates = model.rates(snapshot)
    current_util = (
        utilization_override
        if utilization_override is not None
        else from_scaled(rates.utilization)
    )

    df = model.rate_curve(reserve_factor=snapshot.reserve_factor)
    fig = rate_curve_chart(
        df,
        current_utilization=current_util,
        kink=from_scaled(model.kink),
        title=f"{market} Rate Curve",
    )
    st.plotly_chart(fig, use_container_width=True)

    if utilization_override is not None:
        scaled_util = to_scaled(utilization_override)
        borrow = borrow_rate_at(scaled_util, model.parameters)
        supply = supply_rate_at(scaled_util, borrow, snapshot.reserve_factor)
    else:
        borrow, supply = rates.borrow_rate, rates.supply_rate

    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Utilization", f"{current_util*100:.2f}%")
    with c2:
        st.metric("Borrow APR", f"{from_scaled(model.annualize(borrow))*100:.2f}%")
    with c3:
        st.metric("Supply APR", f"{from_scaled(model.annualize(supply))*100:.2f}%")

    st.divider()
    st.subheader("Rate Sensitivity")

    utilizations = [0.2, 0.4, 0.6, 0.8, 0.85, 0.9, 0.95, 1.0]
    rows = []
    for u in utilizations:
        row = df.iloc[(df["utilization"] - u).abs().idxmin()]
        rows.append(
            {
                "Utilization": f"{u*100:.0f}%",
                "Borrow APR": f"{row['borrow_rate']*100:.2f}%",
                "Supply APR": f"{row['supply_rate']*100:.2f}%",
            }
        )
    st.table(pd.DataFrame(rows))
