"""
Chart rendering functions for the Wallet Holdings Dashboard
Handles Plotly chart creation and rendering.
"""

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from .. import config

CHART_HEIGHTS = config.CHART_HEIGHTS
COLORS = config.COLORS


def build_allocation_figure(holdings_df: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Pie(
        labels=holdings_df["Currency"],
        values=holdings_df["USD Value"],
        hole=0.55,
        sort=False,
        textinfo="label+percent",
        hovertemplate="%{label}: $%{value:,.2f}<extra></extra>",
    ))
    fig.update_layout(
        height=CHART_HEIGHTS.get("allocation", 320),
        margin=dict(l=10, r=10, t=10, b=10),
        showlegend=False,
        paper_bgcolor=COLORS["background"],
        font=dict(color=COLORS["text"]),
    )
    return fig


def render_allocation_chart(holdings_df: pd.DataFrame) -> None:
    if holdings_df.empty or not (holdings_df["USD Value"] > 0).any():
        st.info("Nothing to allocate yet.")
        return
    st.plotly_chart(build_allocation_figure(holdings_df), use_container_width=True)
