from dataclasses import dataclass
from typing import Dict, Optional

from tools.numbers import safe_div


@dataclass(frozen=True)
class Holding:
    id: str
    name: str
    total_units: int
    total_value: float

    @property
    def price_per_unit(self) -> float:
        return safe_div(self.total_value, self.total_units)


# Demo portfolio shown in the sell dialog.
HOLDINGS: Dict[str, Holding] = {
    h.id: h
    for h in (
        Holding("lacosta", "LaCosta @ Sunway South Quay", 1250, 1250000),
        Holding("geolake", "Sunway GeoLake Residences", 940, 1080000),
        Holding("greenfield", "Greenfield Residence", 780, 735000),
        Holding("ridzuan", "Ridzuan Condominium", 520, 612000),
    )
}

DEFAULT_HOLDING_ID = "lacosta"


def get_holding(holding_id: Optional[str]) -> Holding:
    return HOLDINGS.get(holding_id or DEFAULT_HOLDING_ID, HOLDINGS[DEFAULT_HOLDING_ID])


def holding_from_property(prop, max_units: int) -> Holding:
    """Purchase window for the buy dialog: at most `max_units` tokens at the listing's token price."""
    units = max(1, min(int(prop.total_tokens), int(max_units)))
    return Holding(prop.id, prop.name, units, units * prop.token_price)
