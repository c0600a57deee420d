"""
Buy / sell dialog state: the thin layer between UI events and the reconciler.

Lifecycle: closed -> open (zero baseline) -> editing -> closed. There is no
"submitted" state; submit() only closes the dialog, no order is placed.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from tools.formatting import amount_input_text, fmt_money, fmt_tokens, fmt_units, units_input_text
from tools.holdings import Holding
from tools.numbers import clamp, to_number
from tools.reconcile import (
    SliderSpec,
    TradeState,
    reconcile,
    slider_spec,
    slider_value,
    switch_mode,
    zero_state,
)

logger = logging.getLogger(__name__)

CLOSED, OPEN, EDITING = "closed", "open", "editing"
SIDES = ("buy", "sell")


class TradeModalClosedError(RuntimeError):
    pass


@dataclass(frozen=True)
class TradeView:
    amount_text: str
    units_text: str
    percent_label: str
    total_text: str
    units_summary: str
    available_units_text: str
    unit_price_text: str
    amount_enabled: bool
    units_enabled: bool
    slider: SliderSpec
    slider_value: float
    auto_invest: bool
    auto_invest_cap: Optional[float]


class TradeModal:
    def __init__(self, side: str, holding: Holding, default_cap: float = 15):
        if side not in SIDES:
            raise ValueError(f"Unknown trade side: {side!r}")
        self.side = side
        self.holding = holding
        self.phase = CLOSED
        self.state = zero_state()
        self.auto_invest = False
        self.auto_invest_cap: Optional[float] = None
        self._default_cap = default_cap

    @property
    def is_open(self) -> bool:
        return self.phase != CLOSED

    def open(self, holding: Optional[Holding] = None) -> TradeView:
        if holding is not None:
            self.holding = holding
        self.state = zero_state(self.state.mode)
        self.phase = OPEN
        return self.view()

    def close(self) -> None:
        self.phase = CLOSED

    def select_holding(self, holding: Holding) -> TradeView:
        self._require_open()
        self.holding = holding
        self.state = zero_state(self.state.mode)
        self.phase = OPEN
        return self.view()

    def edit(self, field: str, raw_value) -> TradeView:
        self._require_open()
        self.state = reconcile(self.state, field, raw_value, self.holding)
        self.phase = EDITING
        return self.view()

    def slide(self, value) -> TradeView:
        return self.edit(self.state.mode, value)

    def set_mode(self, mode: str) -> TradeView:
        self._require_open()
        self.state = switch_mode(self.state, mode)
        return self.view()

    def toggle_auto_invest(self, enabled: bool) -> TradeView:
        self.auto_invest = enabled
        if enabled and self.auto_invest_cap is None:
            self.auto_invest_cap = self._default_cap
        return self.view()

    def set_auto_invest_cap(self, cap) -> TradeView:
        self.auto_invest_cap = clamp(to_number(cap), 0.0, 100.0)
        return self.view()

    def submit(self) -> TradeState:
        """Stub: closes the dialog and hands back the final quantity. Nothing is executed."""
        self._require_open()
        final = self.state
        logger.info(
            "%s request for %s: %.2f units (%s) not executed, trading is disabled in the demo",
            self.side, self.holding.id, final.units, fmt_money(final.amount, 2),
        )
        self.close()
        return final

    def _require_open(self) -> None:
        if self.phase == CLOSED:
            raise TradeModalClosedError(f"{self.side} dialog is closed")

    def percent_label(self) -> str:
        if self.holding.total_units <= 0:
            return "0% of holdings"
        s = self.state
        detail = fmt_money(s.amount, 2) if s.mode == "amount" else fmt_units(s.units)
        return f"{s.percent}% of holdings ({detail})"

    def view(self) -> TradeView:
        s = self.state
        return TradeView(
            amount_text=amount_input_text(s.amount),
            units_text=units_input_text(s.units),
            percent_label=self.percent_label(),
            total_text=fmt_money(s.amount, 2),
            units_summary=fmt_units(s.units) if self.side == "sell" else fmt_tokens(s.units),
            available_units_text=fmt_units(self.holding.total_units),
            unit_price_text=fmt_money(self.holding.price_per_unit, 2),
            amount_enabled=s.mode == "amount",
            units_enabled=s.mode == "units",
            slider=slider_spec(s.mode, self.holding),
            slider_value=slider_value(s),
            auto_invest=self.auto_invest,
            auto_invest_cap=self.auto_invest_cap if self.auto_invest else None,
        )
