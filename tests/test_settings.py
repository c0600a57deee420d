from tools.settings import _merge, load_property_seeds, settings


def test_yaml_config_is_loaded():
    cfg = settings()
    assert cfg["currency_symbol"] == "RM"
    assert cfg["marketplace"]["per_page"] == 8
    assert cfg["trade"]["buy_max_tokens"] == 250
    assert cfg["perplexity"]["api_key"] == ""


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PERPLEXITY_MODEL", "sonar-pro")
    monkeypatch.setenv("WALLET_RPC_URL", "http://localhost:8545")
    settings.cache_clear()
    cfg = settings()
    assert cfg["perplexity"]["model"] == "sonar-pro"
    assert cfg["wallet"]["rpc_url"] == "http://localhost:8545"


def test_merge_is_deep():
    out = _merge({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}})
    assert out == {"a": {"x": 1, "y": 3}, "b": 1}


def test_property_seeds():
    seeds = load_property_seeds()
    assert [s["id"] for s in seeds][:2] == ["lacosta-south-quay-4br", "lacosta-south-quay-3br"]
    assert len(seeds) == 4
