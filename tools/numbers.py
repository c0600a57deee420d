import math
import re
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

_NON_NUMERIC = re.compile(r"[^0-9.,-]")


def to_number(raw) -> float:
    """Coerce user input to a float. Anything unparseable becomes 0."""
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else 0.0
    if not isinstance(raw, str):
        return 0.0
    cleaned = _NON_NUMERIC.sub("", raw).replace(",", "")
    if not cleaned:
        return 0.0
    try:
        value = float(cleaned)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a spreadsheet: halves go away from zero."""
    try:
        quant = Decimal(1).scaleb(-digits)
        return float(Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return 0.0


def safe_div(num: float, den: float) -> float:
    return num / den if den else 0.0
