"""Streamlit widgets for the buy / sell dialogs, driven by a TradeModal."""
import streamlit as st

from tools.trade_modal import TradeModal, TradeView

MODE_LABELS = {"amount": "By amount", "units": "By units"}


def _sync(prefix: str, view: TradeView, mode: str, percent: int) -> None:
    # Widget values are rewritten from the reconciled state after every edit.
    st.session_state[f"{prefix}_amount"] = float(view.amount_text)
    st.session_state[f"{prefix}_units"] = float(view.units_text)
    st.session_state[f"{prefix}_percent"] = percent
    if not view.slider.disabled:
        st.session_state[f"{prefix}_slider_{mode}"] = float(view.slider_value)


def _edit(modal: TradeModal, prefix: str, field: str, key: str) -> None:
    view = modal.edit(field, st.session_state[key])
    _sync(prefix, view, modal.state.mode, modal.state.percent)


def _slide(modal: TradeModal, prefix: str, key: str) -> None:
    view = modal.slide(st.session_state[key])
    _sync(prefix, view, modal.state.mode, modal.state.percent)


def _mode(modal: TradeModal, prefix: str) -> None:
    mode = st.session_state[f"{prefix}_mode"]
    view = modal.set_mode(mode)
    _sync(prefix, view, mode, modal.state.percent)


def _cap(modal: TradeModal, key: str) -> None:
    modal.set_auto_invest_cap(st.session_state[key])


def reset_widgets(modal: TradeModal, prefix: str) -> None:
    _sync(prefix, modal.view(), modal.state.mode, modal.state.percent)


def render_trade_form(modal: TradeModal, prefix: str, percent_slider: bool) -> TradeView:
    """
    Amount and units inputs (only the active mode's input is editable), a
    slider, and the auto-invest toggle. With percent_slider the slider edits
    the share of the holding; otherwise it moves in the active mode's unit.
    """
    view = modal.view()

    st.radio(
        "Trade by",
        options=list(MODE_LABELS),
        format_func=MODE_LABELS.get,
        horizontal=True,
        key=f"{prefix}_mode",
        on_change=_mode,
        args=(modal, prefix),
    )

    c1, c2 = st.columns(2)
    with c1:
        st.number_input(
            "Amount (RM)",
            min_value=0.0,
            step=max(0.01, float(modal.holding.price_per_unit)),
            format="%.2f",
            key=f"{prefix}_amount",
            disabled=not view.amount_enabled,
            on_change=_edit,
            args=(modal, prefix, "amount", f"{prefix}_amount"),
        )
    with c2:
        st.number_input(
            "Units",
            min_value=0.0,
            step=1.0,
            format="%.2f",
            key=f"{prefix}_units",
            disabled=not view.units_enabled,
            on_change=_edit,
            args=(modal, prefix, "units", f"{prefix}_units"),
        )

    if percent_slider:
        st.slider(
            "Share of holding (%)",
            min_value=0,
            max_value=100,
            step=1,
            key=f"{prefix}_percent",
            disabled=view.slider.disabled,
            on_change=_edit,
            args=(modal, prefix, "percent", f"{prefix}_percent"),
        )
    elif not view.slider.disabled:
        key = f"{prefix}_slider_{modal.state.mode}"
        st.slider(
            "Amount (RM)" if modal.state.mode == "amount" else "Units",
            min_value=float(view.slider.min),
            max_value=float(view.slider.max),
            step=float(view.slider.step),
            key=key,
            on_change=_slide,
            args=(modal, prefix, key),
        )
    st.caption(view.percent_label)

    auto = st.checkbox("Auto-invest distributions", key=f"{prefix}_auto")
    view = modal.toggle_auto_invest(auto)
    if view.auto_invest:
        key = f"{prefix}_cap"
        if key not in st.session_state:
            st.session_state[key] = float(view.auto_invest_cap)
        st.number_input(
            "Monthly auto-invest cap (%)",
            min_value=0.0,
            max_value=100.0,
            key=key,
            on_change=_cap,
            args=(modal, key),
        )
    return view
