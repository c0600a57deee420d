from tools.catalog import (
    FULLY_TOKENIZED,
    HOUSE_IMAGES,
    Coordinates,
    DetailOverrides,
    ImageCycle,
    build_catalog,
    catalog_index,
    create_map_embed_url,
    create_property_from_seed,
    slugify,
)


def test_catalog_size_and_featured_first():
    catalog = build_catalog()
    assert len(catalog) == 24
    assert catalog[0].id == "lacosta-south-quay-4br"
    assert len(catalog_index(catalog)) == len(catalog)


def test_catalog_is_deterministic_per_seed():
    a = build_catalog(total=12, seed=3)
    b = build_catalog(total=12, seed=3)
    assert [(p.id, p.property_value, p.tokenization) for p in a] == [
        (p.id, p.property_value, p.tokenization) for p in b
    ]


def test_featured_listing_financials():
    lacosta = catalog_index(build_catalog())["lacosta-south-quay-4br"]
    assert lacosta.token_price == 240
    assert lacosta.total_tokens == 10000
    m = lacosta.detail.metrics
    assert (m.management_fee, m.net_monthly_income, m.net_income_per_token, m.yield_percent) == (450, 7080, 0.71, 3.5)
    assert "openstreetmap.org/export/embed.html" in lacosta.detail.map_embed_url


def test_sparse_seed_gets_defaults():
    prop = create_property_from_seed({"name": "Test Tower"}, ImageCycle())
    assert prop.id == "test-tower"
    assert prop.property_value == 1000000
    assert prop.token_price == 100
    assert prop.total_tokens == 10000
    assert prop.status == "Available"
    assert prop.image == HOUSE_IMAGES[0]

    fin = prop.detail.financials
    assert fin.monthly_rent == 4000
    assert (fin.maintenance_fees, fin.insurance_taxes, fin.reserve_fund, fin.other_expenses) == (720, 320, 200, 160)
    assert prop.detail.metrics.net_monthly_income == 2400
    assert prop.detail.tenant.type == "Family"
    assert prop.detail.map_embed_url.startswith("https://maps.google.com/maps?q=")


def test_commercial_and_fully_tokenized():
    prop = create_property_from_seed(
        {"name": "Office One", "category": "commercial", "tokenization": 100, "property_value": 3000000},
        ImageCycle(),
    )
    assert prop.status == FULLY_TOKENIZED
    assert prop.detail.tenant.type == "Corporate"
    assert prop.detail.property_type == "Commercial Suite"
    assert prop.detail.tenancy_status == "Occupied"
    assert prop.vacancy_summary.endswith("Existing holders receive pro-rata distributions.")


def test_overrides_win_over_defaults():
    prop = create_property_from_seed(
        {"name": "Tower", "property_value": 1000000, "detail": {"monthly_rent": 5000, "developer": "Acme"}},
        ImageCycle(),
    )
    assert prop.detail.financials.monthly_rent == 5000
    assert prop.detail.financials.maintenance_fees == 900
    assert prop.detail.developer == "Acme"


def test_overrides_from_dict_drops_bad_coordinates_and_unknown_keys():
    o = DetailOverrides.from_dict({"coordinates": {"lat": "north"}, "colour": "blue"})
    assert o.coordinates is None
    o = DetailOverrides.from_dict({"coordinates": {"lat": 3.0, "lng": 101.5}})
    assert o.coordinates == Coordinates(3.0, 101.5)


def test_map_embed_url():
    url = create_map_embed_url("anything", Coordinates(95, 200, 1, 0))
    assert url.startswith("https://www.openstreetmap.org/export/embed.html?")
    assert "marker=90.000000%2C180.000000" in url
    assert create_map_embed_url("1 Jalan Ampang").endswith("&output=embed")
    assert create_map_embed_url("") == ""


def test_image_cycle_wraps():
    cycle = ImageCycle(["a", "b"])
    assert [cycle() for _ in range(3)] == ["a", "b", "a"]


def test_slugify():
    assert slugify("Café Déjà Vu!") == "cafe-deja-vu"
    assert slugify("  LaCosta @ Sunway ") == "lacosta-sunway"
