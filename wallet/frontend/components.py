"""
UI Components for the Wallet Holdings Dashboard
Streamlit rendering of the wallet state; all text goes through the view model formatters.
"""

from html import escape
from typing import List, Optional

import streamlit as st

from .. import config
from ..backend import models
from ..backend.wallet_state import WalletViewModel

COLORS = config.COLORS


def get_global_styles() -> str:
    return f"""
    <style>
    .wallet-card {{background:{COLORS['surface']};border-radius:12px;padding:18px 20px;margin-bottom:16px;}}
    .wallet-total-label {{color:{COLORS['text_secondary']};font-size:0.85rem;}}
    .wallet-total-value {{color:{COLORS['text']};font-size:1.8rem;font-weight:600;}}
    .holding-row {{display:flex;align-items:center;gap:12px;padding:8px 0;}}
    .holding-row img {{width:32px;height:32px;}}
    .holding-name {{color:{COLORS['text']};font-weight:600;}}
    .holding-rate {{color:{COLORS['text_secondary']};font-size:0.8rem;}}
    .holding-values {{margin-left:auto;text-align:right;}}
    </style>
    """


def build_total_card_html(total: str, count: int) -> str:
    label = "asset" if count == 1 else "assets"
    return (
        '<div class="wallet-card">'
        '<div class="wallet-total-label">Total Balance</div>'
        f'<div class="wallet-total-value">{escape(total)}</div>'
        f'<div class="wallet-total-label">{count} {label}</div>'
        "</div>"
    )


def build_holding_row_html(holding: models.HoldingView, view_model: WalletViewModel) -> str:
    amount = view_model.format_amount(holding.amount, holding.symbol)
    value = view_model.format_usd_value(holding.usd_value)
    rate = view_model.format_original_rate(holding.usd_rate_str, holding.symbol)
    return (
        '<div class="holding-row">'
        f'<img src="{escape(holding.image_url, quote=True)}" alt="{escape(holding.symbol)}"/>'
        f'<div><div class="holding-name">{escape(holding.name)}</div>'
        f'<div class="holding-rate">{escape(rate)}</div></div>'
        f'<div class="holding-values"><div>{escape(amount)}</div>'
        f'<div class="holding-rate">{escape(value)}</div></div>'
        "</div>"
    )


def render_total_card(view_model: WalletViewModel) -> None:
    total = view_model.format_usd_value(view_model.total_usd_value.value)
    st.markdown(build_total_card_html(total, len(view_model.holdings.value)), unsafe_allow_html=True)


def render_error_banner(message: Optional[str]) -> None:
    if message:
        st.error(message)


def render_refresh_button(is_refreshing: bool) -> bool:
    return st.button("Refresh", disabled=is_refreshing, use_container_width=True)


@st.dialog("Holding details")
def render_holding_detail(holding: models.HoldingView, view_model: WalletViewModel) -> None:
    if holding.image_url:
        st.image(holding.image_url, width=48)
    st.subheader(f"{holding.name} ({holding.symbol})")
    st.metric("Amount", view_model.format_amount(holding.amount, holding.symbol))
    st.metric("USD Value", view_model.format_usd_value(holding.usd_value))
    st.caption(f"Rate: {view_model.format_original_rate(holding.usd_rate_str, holding.symbol)}")


def render_holdings_list(holdings: List[models.HoldingView], view_model: WalletViewModel) -> None:
    if not holdings:
        st.info("No holdings to display")
        return
    for idx, holding in enumerate(holdings):
        col_row, col_action = st.columns([5, 1])
        with col_row:
            st.markdown(build_holding_row_html(holding, view_model), unsafe_allow_html=True)
        with col_action:
            if st.button("Details", key=f"details-{idx}-{holding.currency}"):
                render_holding_detail(holding, view_model)
