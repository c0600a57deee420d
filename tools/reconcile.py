"""
Keeps the amount / units / percent views of one trade quantity consistent.

Every function here is pure: a TradeState plus an edit goes in, a new
TradeState comes out. Display strings live in tools.trade_modal.
"""
from dataclasses import dataclass, replace

from tools.holdings import Holding
from tools.numbers import clamp, round_half_up, safe_div, to_number

MODES = ("amount", "units")
FIELDS = ("amount", "units", "percent")


@dataclass(frozen=True)
class TradeState:
    mode: str = "amount"
    amount: float = 0.0
    units: float = 0.0
    percent: int = 0


@dataclass(frozen=True)
class SliderSpec:
    min: float
    max: float
    step: float
    disabled: bool = False


def zero_state(mode: str = "amount") -> TradeState:
    _check_mode(mode)
    return TradeState(mode=mode)


def percent_of(units: float, holding: Holding) -> int:
    if holding.total_units <= 0:
        return 0
    return int(round_half_up(100 * units / holding.total_units))


def _round_units(units: float) -> float:
    rounded = round_half_up(units, 2)
    return 0.0 if abs(rounded) < 0.005 else rounded


def _check_mode(mode: str) -> None:
    if mode not in MODES:
        raise ValueError(f"Unknown trade mode: {mode!r}")


def reconcile(state: TradeState, edited: str, raw_value, holding: Holding) -> TradeState:
    """Apply an edit to one field and re-derive the other two."""
    if edited not in FIELDS:
        raise ValueError(f"Unknown trade field: {edited!r}")

    if holding.total_units <= 0:
        return replace(state, amount=0.0, units=0.0, percent=0)

    value = to_number(raw_value)
    price = holding.price_per_unit

    if edited == "amount":
        amount = clamp(value, 0.0, holding.total_value)
        units = clamp(safe_div(amount, price), 0.0, holding.total_units)
    elif edited == "units":
        units = _round_units(clamp(value, 0.0, holding.total_units))
        amount = min(units * price, holding.total_value)
    else:
        pct = clamp(value, 0.0, 100.0)
        units = pct / 100 * holding.total_units
        amount = min(units * price, holding.total_value)

    return replace(state, amount=amount, units=units, percent=percent_of(units, holding))


def switch_mode(state: TradeState, mode: str) -> TradeState:
    # Only the editable input changes; the quantity stays put.
    _check_mode(mode)
    return replace(state, mode=mode)


def slider_spec(mode: str, holding: Holding) -> SliderSpec:
    _check_mode(mode)
    if holding.total_units <= 0:
        return SliderSpec(0, 0, 1, disabled=True)
    if mode == "amount":
        return SliderSpec(0, holding.total_value, holding.price_per_unit)
    return SliderSpec(0, holding.total_units, 1)


def slider_value(state: TradeState) -> float:
    return state.amount if state.mode == "amount" else state.units
