"""
Main Streamlit application for the Wallet Holdings Dashboard
"""

import asyncio
import os
import sys

import streamlit as st

try:
    from . import config
    from .backend.data_processor import build_holdings_frame
    from .backend.wallet_state import WalletViewModel
    from .frontend.charts import render_allocation_chart
    from .frontend.tables import render_holdings_table
    from .frontend.components import (
        get_global_styles,
        render_error_banner,
        render_holdings_list,
        render_refresh_button,
        render_total_card,
    )
except ImportError:
    sys.path.append(os.path.dirname(os.path.dirname(__file__)))
    from wallet import config
    from wallet.backend.data_processor import build_holdings_frame
    from wallet.backend.wallet_state import WalletViewModel
    from wallet.frontend.charts import render_allocation_chart
    from wallet.frontend.tables import render_holdings_table
    from wallet.frontend.components import (
        get_global_styles,
        render_error_banner,
        render_holdings_list,
        render_refresh_button,
        render_total_card,
    )

VIEW_MODEL_KEY = "wallet_view_model"


def get_view_model() -> WalletViewModel:
    view_model = st.session_state.get(VIEW_MODEL_KEY)
    if view_model is None:
        view_model = WalletViewModel()
        st.session_state[VIEW_MODEL_KEY] = view_model
        with st.spinner("Loading wallet..."):
            asyncio.run(view_model.load_wallet_data())
    return view_model


def main() -> None:
    config.configure_logging()
    st.set_page_config(**config.PAGE_CONFIG)
    st.markdown(get_global_styles(), unsafe_allow_html=True)

    view_model = get_view_model()

    col_title, col_refresh = st.columns([4, 1])
    with col_title:
        st.title("Wallet")
    with col_refresh:
        refresh = render_refresh_button(view_model.is_refreshing.value)
    if refresh:
        with st.spinner("Refreshing..."):
            asyncio.run(view_model.refresh_wallet_data())

    render_total_card(view_model)
    render_error_banner(view_model.error_message.value)

    holdings = view_model.holdings.value
    holdings_df = build_holdings_frame(holdings)
    tabs = st.tabs(["Holdings", "Table", "Allocation"])
    with tabs[0]:
        render_holdings_list(holdings, view_model)
    with tabs[1]:
        render_holdings_table(holdings_df)
    with tabs[2]:
        render_allocation_chart(holdings_df)


if __name__ == "__main__":
    main()
