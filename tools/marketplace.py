import math
import re
import unicodedata
from dataclasses import dataclass
from typing import Dict, List, Optional

from tools.catalog import Property

TOKENIZATION_FILTERS = ("", "available", "in-progress", "completed")


@dataclass(frozen=True)
class Page:
    items: List[Property]
    page: int
    total_pages: int
    total_items: int

    @property
    def has_prev(self) -> bool:
        return self.total_items > 0 and self.page > 1

    @property
    def has_next(self) -> bool:
        return self.total_items > 0 and self.page < self.total_pages


def normalize_text(value: str = "") -> str:
    value = unicodedata.normalize("NFKD", str(value).lower())
    value = "".join(ch for ch in value if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]+", " ", value).strip()


def parse_price_range(raw: str):
    """'500000-1000000' -> (500000.0, 1000000.0); anything else -> None."""
    parts = (raw or "").split("-")
    if len(parts) != 2:
        return None
    try:
        lo, hi = float(parts[0]), float(parts[1])
    except ValueError:
        return None
    if not (math.isfinite(lo) and math.isfinite(hi)):
        return None
    return lo, hi


def _matches_tokenization(p: Property, wanted: str) -> bool:
    if wanted == "available":
        return p.tokenization < 100
    if wanted == "in-progress":
        return 0 < p.tokenization < 100
    if wanted == "completed":
        return p.tokenization == 100
    return True


def filter_properties(
    catalog: List[Property],
    search: str = "",
    category: str = "",
    price_range: str = "",
    tokenization: str = "",
) -> List[Property]:
    needle = normalize_text(search)
    digits = re.sub(r"[^0-9]", "", search or "")
    bounds = parse_price_range(price_range)

    out = []
    for p in catalog:
        if needle:
            by_name = needle in normalize_text(p.name)
            by_number = bool(digits) and (
                digits in str(int(p.property_value)) or digits in str(int(p.token_price))
            )
            if not (by_name or by_number):
                continue
        if category and p.category != category:
            continue
        if bounds and not (bounds[0] <= p.property_value <= bounds[1]):
            continue
        if not _matches_tokenization(p, tokenization):
            continue
        out.append(p)
    return out


def paginate(items: List[Property], page: int = 1, per_page: int = 8) -> Page:
    total_pages = max(1, math.ceil(len(items) / per_page))
    page = min(max(1, int(page or 1)), total_pages)
    start = (page - 1) * per_page
    return Page(items=items[start:start + per_page], page=page, total_pages=total_pages, total_items=len(items))


def results_text(count: int) -> str:
    return f"{count} properties found" if count else "No properties found"


def pick_property(
    requested_id: Optional[str],
    selected: Optional[Property],
    catalog: List[Property],
    fallback: Optional[Dict[str, Property]] = None,
    default_id: str = "lacosta-south-quay-4br",
) -> Optional[Property]:
    """
    Resolve the listing for the detail page: the handed-off selection when it
    matches the requested id, then the catalog, then the selection anyway,
    then the fallback listings.
    """
    if selected is not None and (not requested_id or selected.id == requested_id):
        return selected
    if requested_id:
        for p in catalog:
            if p.id == requested_id:
                return p
    if selected is not None:
        return selected
    fallback = fallback or {}
    if requested_id and requested_id in fallback:
        return fallback[requested_id]
    return fallback.get(default_id) or (catalog[0] if catalog else None)


def facts_text(p: Property) -> str:
    beds = p.beds if p.beds is not None else "-"
    baths = p.baths if p.baths is not None else "-"
    sqft = f"{p.sqft:,}" if p.sqft else "-"
    return f"{beds} Beds • {baths} Baths • {sqft} sqft"
