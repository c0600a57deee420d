import copy
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = ROOT / "config" / "marketplace.yaml"
PROPERTIES_PATH = ROOT / "config" / "properties.yaml"

load_dotenv(ROOT / ".env")

DEFAULTS: Dict[str, Any] = {
    "currency_symbol": "RM",
    "marketplace": {"per_page": 8, "catalog_size": 24, "catalog_seed": 7},
    "trade": {"buy_max_tokens": 250, "auto_invest_default_cap": 15},
    "investment_calculator": {"min_investment": 100, "max_multiplier": 400, "default_tokens": 10},
    "financial_defaults": {
        "rent_to_value": 0.004,
        "management_fee_rate": 0.05,
        "maintenance_to_rent": 0.18,
        "insurance_to_rent": 0.08,
        "reserve_to_rent": 0.05,
        "other_to_rent": 0.04,
    },
    "perplexity": {"base_url": "https://api.perplexity.ai", "model": "sonar", "timeout_seconds": 30},
    "wallet": {
        "rpc_url": "",
        "price_url": "https://api.coingecko.com/api/v3/simple/price?ids=ethereum&vs_currencies=myr",
        "price_cache_seconds": 300,
        "timeout_seconds": 5,
    },
    "log_level": "INFO",
}


def _merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_config(path: Path = CONFIG_PATH) -> dict:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {}


@lru_cache
def settings() -> Dict[str, Any]:
    """YAML config merged over defaults, with environment overrides for secrets."""
    cfg = _merge(DEFAULTS, load_config())
    cfg["perplexity"]["api_key"] = os.getenv("PERPLEXITY_API_KEY", "")
    cfg["perplexity"]["model"] = os.getenv("PERPLEXITY_MODEL", cfg["perplexity"]["model"])
    cfg["wallet"]["rpc_url"] = os.getenv("WALLET_RPC_URL", cfg["wallet"]["rpc_url"])
    cfg["log_level"] = os.getenv("LOG_LEVEL", cfg["log_level"])
    return cfg


def load_property_seeds(path: Path = PROPERTIES_PATH) -> list:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or []
    return []


def setup_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings()["log_level"]).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
