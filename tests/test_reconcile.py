import pytest

from tools.holdings import Holding, get_holding
from tools.reconcile import (
    TradeState,
    reconcile,
    slider_spec,
    slider_value,
    switch_mode,
    zero_state,
)

LACOSTA = get_holding("lacosta")  # 1,250 units worth RM1,250,000
EMPTY = Holding("empty", "Empty", 0, 0)


def test_amount_edit_derives_units_and_percent():
    s = reconcile(zero_state(), "amount", "500000", LACOSTA)
    assert s.amount == 500000
    assert s.units == 500
    assert s.percent == 40


def test_units_edit_is_clamped_to_holding():
    s = reconcile(zero_state("units"), "units", 2000, LACOSTA)
    assert s.units == 1250
    assert s.amount == 1250000
    assert s.percent == 100


def test_negative_and_garbage_input_become_zero():
    assert reconcile(zero_state(), "amount", -10, LACOSTA).amount == 0
    s = reconcile(zero_state(), "amount", "abc", LACOSTA)
    assert (s.amount, s.units, s.percent) == (0, 0, 0)


def test_formatted_amount_is_parsed():
    s = reconcile(zero_state(), "amount", "RM250,000", LACOSTA)
    assert s.units == 250
    assert s.percent == 20


def test_units_are_kept_to_two_decimals():
    s = reconcile(zero_state("units"), "units", 12.345, LACOSTA)
    assert s.units == 12.35
    assert s.amount == pytest.approx(12350)
    assert s.percent == 1


def test_tiny_units_round_to_zero():
    s = reconcile(zero_state("units"), "units", 0.004, LACOSTA)
    assert s.units == 0
    assert s.amount == 0


def test_percent_edit():
    s = reconcile(zero_state(), "percent", 40, LACOSTA)
    assert s.units == 500
    assert s.amount == 500000
    assert s.percent == 40
    assert reconcile(zero_state(), "percent", 150, LACOSTA).units == 1250


def test_amount_and_units_round_trip():
    by_amount = reconcile(zero_state(), "amount", 375000, LACOSTA)
    by_units = reconcile(zero_state("units"), "units", by_amount.units, LACOSTA)
    assert by_units.amount == pytest.approx(by_amount.amount)
    assert by_units.percent == by_amount.percent


def test_empty_holding_zeroes_everything():
    for field in ("amount", "units", "percent"):
        s = reconcile(TradeState(amount=10, units=1, percent=5), field, 100, EMPTY)
        assert (s.amount, s.units, s.percent) == (0, 0, 0)


def test_unknown_field_and_mode_are_rejected():
    with pytest.raises(ValueError):
        reconcile(zero_state(), "price", 1, LACOSTA)
    with pytest.raises(ValueError):
        switch_mode(zero_state(), "shares")
    with pytest.raises(ValueError):
        zero_state("shares")


def test_switch_mode_keeps_quantity():
    s = reconcile(zero_state(), "amount", 500000, LACOSTA)
    switched = switch_mode(s, "units")
    assert switched.mode == "units"
    assert (switched.amount, switched.units, switched.percent) == (s.amount, s.units, s.percent)
    assert slider_value(switched) == 500


def test_slider_bounds():
    amount = slider_spec("amount", LACOSTA)
    assert (amount.min, amount.max, amount.step, amount.disabled) == (0, 1250000, 1000, False)
    units = slider_spec("units", LACOSTA)
    assert (units.min, units.max, units.step) == (0, 1250, 1)
    assert slider_spec("amount", EMPTY).disabled


def test_negative_text_input_is_clamped_to_zero():
    s = reconcile(zero_state(), "amount", "-500", LACOSTA)
    assert (s.amount, s.units, s.percent) == (0, 0, 0)
    assert reconcile(zero_state("units"), "units", "-3", LACOSTA).units == 0
    assert reconcile(zero_state(), "percent", "-20", LACOSTA).percent == 0
