import math

from tools.formatting import (
    amount_input_text,
    fmt_count,
    fmt_money,
    fmt_money_or_dash,
    fmt_tokens,
    fmt_units,
    units_input_text,
)
from tools.numbers import clamp, round_half_up, safe_div, to_number


def test_fmt_money():
    assert fmt_money(1250000) == "RM1,250,000"
    assert fmt_money(12.5, 2) == "RM12.50"
    assert fmt_money(None) == "RM0"
    assert fmt_money("abc") == "-"
    assert fmt_money_or_dash(None) == "-"
    assert fmt_money_or_dash(450) == "RM450"


def test_counts_and_units():
    assert fmt_count(1234.5) == "1,234.5"
    assert fmt_count(1250) == "1,250"
    assert fmt_units(12.345) == "12.35 units"
    assert fmt_tokens(1) == "1 token"
    assert fmt_tokens(0) == "0 tokens"


def test_input_text():
    assert amount_input_text(500000) == "500000.00"
    assert units_input_text(12.0) == "12"
    assert units_input_text(3.456) == "3.46"
    assert units_input_text(0.004) == "0"


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(-2.5) == -3
    assert round_half_up(math.inf) == 0


def test_to_number():
    assert to_number("RM1,250.50") == 1250.5
    assert to_number(42) == 42
    assert to_number(True) == 0
    assert to_number(float("nan")) == 0
    assert to_number(None) == 0
    assert to_number("") == 0


def test_clamp_and_safe_div():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert safe_div(1, 0) == 0
    assert safe_div(10, 4) == 2.5


def test_to_number_keeps_sign():
    assert to_number("-500") == -500
    assert to_number("RM-1,250") == -1250
    assert to_number("-") == 0
