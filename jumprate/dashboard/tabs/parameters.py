"""Parameters page — per-block values and governance state."""

import pandas as pd
import streamlit as st

from jumprate.protocol.fixed_point import from_scaled
from jumprate.protocol.model import JumpRateModel


def render_parameters(model: JumpRateModel) -> None:
    """Render the model parameters page."""
    st.header("Model Parameters")

    params = model.parameters
    rows = [
        ("Base rate", params.base_rate_per_period),
        ("Multiplier", params.multiplier_per_period),
        ("Jump multiplier", params.jump_multiplier_per_period),
    ]
    st.table(
        pd.DataFrame(
            [
                {
                    "Parameter": name,
                    "Per Block (raw)": str(value),
                    "Per Year": f"{from_scaled(model.annualize(value))*100:.4f}%",
                }
                for name, value in rows
            ]
        )
    )
    st.metric("Kink", f"{from_scaled(params.kink)*100:.2f}%")
    st.caption(f"Blocks per year: {model.periods_per_year:,}")

    st.divider()
    st.subheader("Governance")
    ownership = model.ownership
    st.text(f"Owner:         {ownership.owner}")
    st.text(f"Pending owner: {ownership.pending_owner or '—'}")
