import pandas as pd
import streamlit as st

from trade_form import render_trade_form, reset_widgets
from tools.formatting import fmt_money
from tools.holdings import HOLDINGS, get_holding
from tools.settings import settings
from tools.trade_modal import TradeModal

st.set_page_config(page_title="My Investments • Tokenized Property Marketplace", layout="wide")
st.title("💼 My Investments")
st.caption("Demo portfolio. Selling does not place an order.")

df = pd.DataFrame(
    [
        {
            "Property": h.name,
            "Units": h.total_units,
            "Value (RM)": h.total_value,
            "Price / unit (RM)": round(h.price_per_unit, 2),
        }
        for h in HOLDINGS.values()
    ]
)
st.dataframe(df, use_container_width=True, hide_index=True)
st.metric("Portfolio value", fmt_money(df["Value (RM)"].sum()))


def get_sell_modal() -> TradeModal:
    if "sell_modal" not in st.session_state:
        st.session_state["sell_modal"] = TradeModal(
            "sell", get_holding(None), default_cap=settings()["trade"]["auto_invest_default_cap"]
        )
    return st.session_state["sell_modal"]


def _select(modal: TradeModal) -> None:
    modal.select_holding(get_holding(st.session_state["sell_holding"]))
    reset_widgets(modal, "sell")


@st.dialog("Sell tokens")
def sell_dialog(modal: TradeModal):
    st.selectbox(
        "Property",
        options=list(HOLDINGS),
        format_func=lambda hid: HOLDINGS[hid].name,
        key="sell_holding",
        on_change=_select,
        args=(modal,),
    )
    view = modal.view()
    c1, c2 = st.columns(2)
    c1.metric("Available", view.available_units_text)
    c2.metric("Unit price", view.unit_price_text)

    view = render_trade_form(modal, "sell", percent_slider=True)
    st.metric("Estimated proceeds", view.total_text)

    a, b = st.columns(2)
    if a.button("Confirm sale", type="primary"):
        modal.submit()
        st.toast("Sales are disabled in this demo; nothing was executed.")
        st.rerun()
    if b.button("Cancel"):
        modal.close()
        st.rerun()


modal = get_sell_modal()
if st.button("Sell tokens", type="primary"):
    modal.open(get_holding(st.session_state.get("sell_holding")))
    reset_widgets(modal, "sell")
    sell_dialog(modal)