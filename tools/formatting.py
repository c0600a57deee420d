from tools.numbers import round_half_up
from tools.settings import settings


def _symbol() -> str:
    return settings()["currency_symbol"]


def fmt_money(x, digits: int = 0):
    try:
        return f"{_symbol()}{float(x or 0):,.{digits}f}"
    except (TypeError, ValueError):
        return "-"


def fmt_money_or_dash(x, digits: int = 0):
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        return "-"
    return fmt_money(x, digits)


def fmt_count(x) -> str:
    """Thousands separators, up to two decimals, no trailing zeros."""
    value = round_half_up(float(x or 0), 2)
    if value == int(value):
        return f"{int(value):,}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def fmt_units(x) -> str:
    return f"{fmt_count(x)} units"


def fmt_tokens(x) -> str:
    value = x or 0
    return f"{fmt_count(value)} token{'' if value == 1 else 's'}"


def amount_input_text(x) -> str:
    return f"{round_half_up(float(x or 0), 2):.2f}"


def units_input_text(x) -> str:
    rounded = round_half_up(float(x or 0), 2)
    if abs(rounded) < 0.005:
        return "0"
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}"
