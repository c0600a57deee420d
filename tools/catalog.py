"""
Property listings for the marketplace and detail pages.

Listings are built from sparse seed records: a base record plus an optional
DetailOverrides, with every missing detail filled in field by field.
"""
import random
import re
import unicodedata
from dataclasses import dataclass, field, fields
from typing import Callable, Dict, List, Optional
from urllib.parse import quote, urlencode

from tools.numbers import clamp, round_half_up
from tools.projection import FinancialMetrics, FinancialProfile, derive_metrics
from tools.settings import load_property_seeds, settings

HOUSE_IMAGES = [
    "pexels-binyaminmellish-106399.jpg",
    "pexels-binyaminmellish-1396132.jpg",
    "pexels-expect-best-79873-323780.jpg",
    "pexels-luis-yanez-57302-206172.jpg",
    "pexels-pixabay-210617.jpg",
    "pexels-pixabay-259588.jpg",
    "pexels-pixabay-259593.jpg",
    "pexels-pixabay-277667.jpg",
    "pexels-pixasquare-1115804.jpg",
    "pexels-scottwebb-1029599.jpg",
    "pexels-fotios-photos-2816323.jpg",
    "pexels-tara-winstead-8407011.jpg",
    "pexels-perqued-13041118.jpg",
    "pexels-heyho-7598376.jpg",
    "pexels-b-s-gulesan-2144469394-30847025.jpg",
    "pexels-szafran-30866045.jpg",
    "pexels-lina-3639542.jpg",
    "pexels-julia-kuzenkov-442028-1974596.jpg",
]

GENERATED_NAMES = [
    "Arte Mont Kiara Residences",
    "The Astaka @ JB City",
    "Aria Luxury Residence",
    "Pavilion Suites Kuala Lumpur",
    "EcoSky Kuala Lumpur",
    "Tropicana Gardens Signatures",
    "M Vertica Cheras",
    "Bukit Bintang City Loft",
    "Star Residences KLCC",
    "SouthPoint Mid Valley",
    "Sentral Suites @ KL Sentral",
    "Tropicana Metropark Paisley",
    "The Fennel @ Sentul",
    "KSL Residences Daya",
    "Southkey Mosaic Residences",
    "Quayside Seafront Resort",
    "Queens Residences Q1",
    "The Light Collection Penang",
]

GENERATED_LOCATIONS = [
    "Kuala Lumpur, Federal Territory",
    "Petaling Jaya, Selangor",
    "Shah Alam, Selangor",
    "Johor Bahru, Johor",
    "George Town, Penang",
    "Iskandar Puteri, Johor",
    "Cheras, Kuala Lumpur",
    "Mont Kiara, Kuala Lumpur",
]

CATEGORIES = ["residential", "commercial"]
FULLY_TOKENIZED, AVAILABLE = "Fully Tokenized", "Available"


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float
    lat_offset: float = 0.01
    lng_offset: float = 0.01


@dataclass(frozen=True)
class VacancyRisk:
    level: str
    summary: str = ""


@dataclass(frozen=True)
class TenantProfile:
    type: str
    monthly_rent: Optional[float]
    lease_remaining: str
    credit_score: str
    payment_consistency: str
    vacancy_risk: VacancyRisk


@dataclass(frozen=True)
class Liquidity:
    secondary_demand: str = "12 bids open"
    average_spread: str = "±2%"
    sale_time: str = "~3 days"


@dataclass(frozen=True)
class DetailOverrides:
    """Sparse per-listing detail. None means "use the default"."""
    address: Optional[str] = None
    map_embed_url: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    property_type: Optional[str] = None
    year_built: Optional[int] = None
    developer: Optional[str] = None
    ownership: Optional[str] = None
    tenancy_status: Optional[str] = None
    tenant_type: Optional[str] = None
    monthly_rent: Optional[float] = None
    lease_remaining: Optional[str] = None
    tenant_credit_score: Optional[str] = None
    payment_consistency: Optional[str] = None
    vacancy_risk: Optional[VacancyRisk] = None
    maintenance_fees: Optional[float] = None
    insurance_taxes: Optional[float] = None
    management_fee_rate: Optional[float] = None
    reserve_fund: Optional[float] = None
    other_expenses: Optional[float] = None
    liquidity: Optional[Liquidity] = None

    @classmethod
    def from_dict(cls, raw: Optional[dict]) -> "DetailOverrides":
        raw = dict(raw or {})
        known = {f.name for f in fields(cls)}
        coords = raw.get("coordinates")
        if isinstance(coords, dict) and _is_num(coords.get("lat")) and _is_num(coords.get("lng")):
            raw["coordinates"] = Coordinates(
                lat=coords["lat"],
                lng=coords["lng"],
                lat_offset=coords.get("lat_offset", 0.01),
                lng_offset=coords.get("lng_offset", 0.01),
            )
        else:
            raw["coordinates"] = None
        if isinstance(raw.get("vacancy_risk"), dict):
            raw["vacancy_risk"] = VacancyRisk(**raw["vacancy_risk"])
        if isinstance(raw.get("liquidity"), dict):
            raw["liquidity"] = Liquidity(**raw["liquidity"])
        return cls(**{k: v for k, v in raw.items() if k in known})


@dataclass(frozen=True)
class PropertyDetail:
    address: str
    coordinates: Optional[Coordinates]
    map_embed_url: str
    property_type: str
    year_built: int
    developer: str
    ownership: str
    tenancy_status: str
    tenant: TenantProfile
    financials: FinancialProfile
    metrics: FinancialMetrics
    liquidity: Liquidity


@dataclass
class Property:
    id: str
    name: str
    category: str
    location: str
    beds: Optional[int]
    baths: Optional[int]
    sqft: Optional[int]
    tokenization: int
    property_value: float
    token_price: float
    total_tokens: int
    image: str
    status: str
    detail: Optional[PropertyDetail] = field(default=None, repr=False)

    @property
    def estimated_holders(self) -> int:
        return max(12, int(round_half_up(self.tokenization / 100 * self.total_tokens / 80)))

    @property
    def vacancy_summary(self) -> str:
        risk = self.detail.tenant.vacancy_risk
        tail = (
            "Existing holders receive pro-rata distributions."
            if self.status == FULLY_TOKENIZED
            else "Current tenant underpins stable cash flow."
        )
        return f"{risk.summary + '.' if risk.summary else ''} {tail}".strip()


def _is_num(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def slugify(text: str = "") -> str:
    text = unicodedata.normalize("NFKD", str(text).lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]+", "-", text).strip("-")


def create_map_embed_url(address: str, coordinates: Optional[Coordinates] = None) -> str:
    if coordinates is not None:
        lat = clamp(coordinates.lat, -90, 90)
        lng = clamp(coordinates.lng, -180, 180)
        lat_off = clamp(coordinates.lat_offset, 0.002, 0.25)
        lng_off = clamp(coordinates.lng_offset, 0.002, 0.25)
        bbox = ",".join(
            f"{v:.6f}"
            for v in (
                clamp(lng - lng_off, -180, 180),
                clamp(lat - lat_off, -90, 90),
                clamp(lng + lng_off, -180, 180),
                clamp(lat + lat_off, -90, 90),
            )
        )
        query = urlencode({"bbox": bbox, "layer": "mapnik", "marker": f"{lat:.6f},{lng:.6f}"})
        return f"https://www.openstreetmap.org/export/embed.html?{query}"
    if address:
        return f"https://maps.google.com/maps?q={quote(address)}&output=embed"
    return ""


def map_search_url(query: str) -> str:
    return f"https://www.openstreetmap.org/search?query={quote(query or 'Bandar Sunway, Selangor')}"


def default_financials(property_value: float, o: DetailOverrides) -> FinancialProfile:
    d = settings()["financial_defaults"]
    rent = o.monthly_rent if o.monthly_rent is not None else round_half_up(property_value * d["rent_to_value"])

    def pick(value, ratio):
        return value if value is not None else round_half_up(rent * ratio)

    return FinancialProfile(
        monthly_rent=rent,
        maintenance_fees=pick(o.maintenance_fees, d["maintenance_to_rent"]),
        insurance_taxes=pick(o.insurance_taxes, d["insurance_to_rent"]),
        management_fee_rate=o.management_fee_rate if o.management_fee_rate is not None else d["management_fee_rate"],
        reserve_fund=pick(o.reserve_fund, d["reserve_to_rent"]),
        other_expenses=pick(o.other_expenses, d["other_to_rent"]),
    )


def build_detail(prop: Property, o: DetailOverrides, rng: Optional[random.Random] = None) -> PropertyDetail:
    rng = rng or random.Random(prop.id)
    commercial = prop.category == "commercial"
    address = o.address or f"{prop.name}, {prop.location}"
    financials = default_financials(prop.property_value, o)

    vacancy = o.vacancy_risk or (
        VacancyRisk("Low", "avg 95% occupancy in area")
        if prop.tokenization >= 60
        else VacancyRisk("Moderate", "avg 88% occupancy in area")
    )
    tenant = TenantProfile(
        type=o.tenant_type or ("Corporate" if commercial else "Family"),
        monthly_rent=financials.monthly_rent,
        lease_remaining=o.lease_remaining or f"{1 + rng.randrange(2)} years {3 + rng.randrange(8)} months",
        credit_score=o.tenant_credit_score or "730 / 850 (Good)",
        payment_consistency=o.payment_consistency or "12/12 months on time",
        vacancy_risk=vacancy,
    )
    return PropertyDetail(
        address=address,
        coordinates=o.coordinates,
        map_embed_url=o.map_embed_url or create_map_embed_url(address, o.coordinates),
        property_type=o.property_type or ("Commercial Suite" if commercial else "Residential Condominium"),
        year_built=o.year_built or 2012 + rng.randrange(8),
        developer=o.developer or "Sunway Property",
        ownership=o.ownership or "Freehold",
        tenancy_status=o.tenancy_status or ("Occupied" if prop.tokenization >= 50 else "Vacant"),
        tenant=tenant,
        financials=financials,
        metrics=derive_metrics(financials, prop.total_tokens, prop.property_value),
        liquidity=o.liquidity or Liquidity(secondary_demand=f"{10 + rng.randrange(4)} bids open"),
    )


def create_property_from_seed(seed: dict, next_image: Callable[[], str], rng: Optional[random.Random] = None) -> Property:
    value = seed.get("property_value")
    value = float(value) if _is_num(value) and value > 0 else 1000000.0
    token_price = seed.get("token_price")
    if not (_is_num(token_price) and token_price > 0):
        token_price = max(100, int(round_half_up(value / 10000)))
    total_tokens = seed.get("total_tokens")
    if not (_is_num(total_tokens) and total_tokens > 0):
        total_tokens = max(1, int(round_half_up(value / token_price)))
    tokenization = int(seed.get("tokenization") or 0)

    prop = Property(
        id=seed.get("id") or slugify(seed.get("name", "")),
        name=seed.get("name", "Untitled listing"),
        category=seed.get("category") or "residential",
        location=seed.get("location", ""),
        beds=seed.get("beds"),
        baths=seed.get("baths"),
        sqft=seed.get("sqft"),
        tokenization=tokenization,
        property_value=value,
        token_price=token_price,
        total_tokens=int(total_tokens),
        image=seed.get("image") or next_image(),
        status=seed.get("status") or (FULLY_TOKENIZED if tokenization == 100 else AVAILABLE),
    )
    prop.detail = build_detail(prop, DetailOverrides.from_dict(seed.get("detail")), rng)
    return prop


def generate_seed(index: int, rng: random.Random) -> dict:
    value = round_half_up((900000 + rng.random() * 5200000) / 1000) * 1000
    beds = 2 + rng.randrange(4)
    category = CATEGORIES[index % len(CATEGORIES)]
    name = GENERATED_NAMES[index % len(GENERATED_NAMES)]
    return {
        "id": f"{slugify(name)}-{index + 1}",
        "name": name,
        "category": category,
        "location": GENERATED_LOCATIONS[index % len(GENERATED_LOCATIONS)],
        "beds": beds,
        "baths": max(1, int(round_half_up(beds * 0.75))),
        "sqft": 1100 + rng.randrange(2400),
        "tokenization": min(100, 40 + rng.randrange(60)),
        "property_value": value,
        "detail": {
            "ownership": "Freehold",
            "tenant_type": "Corporate" if category == "commercial" else "Family",
        },
    }


class ImageCycle:
    def __init__(self, images: List[str] = HOUSE_IMAGES):
        self._images = images
        self._last = -1

    def __call__(self) -> str:
        self._last = (self._last + 1) % len(self._images)
        return self._images[self._last]


def build_catalog(total: Optional[int] = None, seed: Optional[int] = None) -> List[Property]:
    cfg = settings()["marketplace"]
    total = cfg["catalog_size"] if total is None else total
    rng = random.Random(cfg["catalog_seed"] if seed is None else seed)
    images = ImageCycle()

    featured = [create_property_from_seed(s, images, rng) for s in load_property_seeds()]
    extra = max(0, total - len(featured))
    generated = [create_property_from_seed(generate_seed(i, rng), images, rng) for i in range(extra)]
    return featured + generated


def catalog_index(catalog: List[Property]) -> Dict[str, Property]:
    return {p.id: p for p in catalog}
