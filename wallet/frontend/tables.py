"""
Table rendering functions for the Wallet Holdings Dashboard
Handles DataFrame display and formatting.
"""

import pandas as pd
import streamlit as st

from ..backend.formatters import format_amount, format_usd_value


def format_holdings_table(holdings_df: pd.DataFrame) -> pd.DataFrame:
    if holdings_df.empty:
        return holdings_df
    df = holdings_df.copy()
    df["Amount"] = [format_amount(a, c) for a, c in zip(df["Amount"], df["Symbol"])]
    df["USD Value"] = df["USD Value"].map(format_usd_value)
    df["Share %"] = df["Share %"].map(lambda v: f"{v:.2f}%")
    return df


def render_holdings_table(holdings_df: pd.DataFrame) -> None:
    if holdings_df.empty:
        st.info("No holdings to display")
        return
    st.dataframe(format_holdings_table(holdings_df), use_container_width=True, hide_index=True)
