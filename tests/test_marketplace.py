from tools.catalog import ImageCycle, create_property_from_seed
from tools.marketplace import facts_text, filter_properties, paginate, parse_price_range, pick_property, results_text


def listing(name, value, tokenization=50, category="residential"):
    return create_property_from_seed(
        {"name": name, "property_value": value, "tokenization": tokenization, "category": category},
        ImageCycle(),
    )


CATALOG = [
    listing("LaCosta Residences", 2400000, 72),
    listing("Geo Lake Suites", 1200000, 100),
    listing("KL Office Tower", 3500000, 0, category="commercial"),
    listing("Café Soleil", 800000, 30),
]


def names(props):
    return [p.name for p in props]


def test_no_filters_returns_everything():
    assert filter_properties(CATALOG) == CATALOG


def test_search_by_name_ignores_case_and_accents():
    assert names(filter_properties(CATALOG, "lacosta")) == ["LaCosta Residences"]
    assert names(filter_properties(CATALOG, "cafe")) == ["Café Soleil"]


def test_search_by_value_digits():
    assert names(filter_properties(CATALOG, "RM2,400,000")) == ["LaCosta Residences"]


def test_category_price_and_tokenization_filters():
    assert names(filter_properties(CATALOG, category="commercial")) == ["KL Office Tower"]
    assert names(filter_properties(CATALOG, price_range="1000000-2500000")) == ["LaCosta Residences", "Geo Lake Suites"]
    assert names(filter_properties(CATALOG, tokenization="completed")) == ["Geo Lake Suites"]
    assert "KL Office Tower" not in names(filter_properties(CATALOG, tokenization="in-progress"))
    assert "Geo Lake Suites" not in names(filter_properties(CATALOG, tokenization="available"))


def test_bad_price_range_is_ignored():
    assert parse_price_range("cheap") is None
    assert parse_price_range("1-2") == (1.0, 2.0)
    assert filter_properties(CATALOG, price_range="cheap") == CATALOG


def test_paginate_clamps_page():
    items = list(range(10))
    page = paginate(items, page=5, per_page=4)
    assert page.page == 3
    assert page.items == [8, 9]
    assert page.has_prev and not page.has_next
    assert paginate(items, page=0, per_page=4).page == 1


def test_paginate_empty():
    page = paginate([], page=2)
    assert (page.page, page.total_pages, page.total_items) == (1, 1, 0)
    assert not page.has_prev and not page.has_next


def test_results_text():
    assert results_text(0) == "No properties found"
    assert results_text(3) == "3 properties found"


def test_pick_property():
    first, second = CATALOG[0], CATALOG[1]
    fallback = {"default": second}
    assert pick_property(None, first, CATALOG) is first
    assert pick_property(second.id, first, CATALOG) is second
    assert pick_property("missing", first, CATALOG) is first
    assert pick_property("missing", None, CATALOG, fallback, default_id="default") is second
    assert pick_property(None, None, CATALOG) is first
    assert pick_property(None, None, []) is None


def test_facts_text_handles_missing_fields():
    full = create_property_from_seed({"name": "Tower", "beds": 3, "baths": 2, "sqft": 1450}, ImageCycle())
    assert facts_text(full) == "3 Beds • 2 Baths • 1,450 sqft"
    sparse = create_property_from_seed({"name": "Lot"}, ImageCycle())
    assert facts_text(sparse) == "- Beds • - Baths • - sqft"
