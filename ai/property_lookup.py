"""
AI-backed property lookup.

Asks the Perplexity model for a JSON property record, pulls the JSON out of
the reply, checks it against the expected shape and returns a sanitised
copy with every field present.
"""
import json
import logging
import math
import re
from typing import Any, Dict, List, Optional

from ai.client import model_name, perplexity_client

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a Malaysian real estate data expert. When given a property address, provide realistic property details in JSON format that reflect the Malaysian market. All monetary values should be returned in Malaysian Ringgit (MYR). The response MUST include estimatedValue as a direct number in propertyData. Format must be:
{
    "propertyData": {
        "estimatedValue": number,  // Direct property value, not in marketTrends
        "squareFootage": number,
        "yearBuilt": number,
        "bedrooms": number,
        "bathrooms": number,
        "propertyType": string,
        "lastSalePrice": number,
        "lastSaleDate": string,
        "lotSize": string,
        "neighborhood": {
            "rating": number (1-10),
            "description": string,
            "amenities": string[]
        },
        "marketTrends": {
            "yearlyAppreciation": string,
            "medianPrice": number,
            "daysOnMarket": number
        }
    }
}"""

_ZERO_WIDTH = re.compile("[\u200b-\u200d\ufeff]")
_FENCED = re.compile(r"```(?:json)?\s*({[\s\S]*?})\s*```")

REQUIRED_TYPES = {
    "estimatedValue": "number",
    "squareFootage": "number",
    "yearBuilt": "number",
    "bedrooms": "number",
    "bathrooms": "number",
    "propertyType": "string",
    "lastSalePrice": "number",
    "lastSaleDate": "string",
    "lotSize": "string",
    "neighborhood": "object",
    "marketTrends": "object",
}


class PropertyDataError(Exception):
    pass


def _is_number(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _clean(block: str) -> str:
    s = re.sub(r"//.*$", "", block, flags=re.M)
    s = re.sub(r"/\*[\s\S]*?\*/", "", s)
    s = re.sub(r"[\n\r\t]", " ", s)
    s = re.sub(r"\s+", " ", s)
    s = re.sub(r",\s*}", "}", s)
    s = re.sub(r"([{,])\s*([a-zA-Z0-9_]+)\s*:", r'\1"\2":', s)
    s = re.sub(r":\s*'([^']*?)'", r':"\1"', s)
    s = re.sub(r",\s*,", ",", s)
    return s.strip()


def _clean_aggressive(block: str) -> str:
    s = re.sub(r"//.*", "", block)
    s = re.sub(r",(\s*[}\]])", r"\1", s)
    s = re.sub(r"(['\"])?([a-zA-Z0-9_]+)(['\"])?\s*:", r'"\2":', s)
    s = re.sub(r"\s+", " ", s)
    return s.strip()


def _json_block(content: str) -> Optional[str]:
    m = _FENCED.search(content)
    if m:
        return m.group(1)
    start, end = content.find("{"), content.rfind("}")
    if start != -1 and end > start:
        return content[start:end + 1]
    return None


def extract_json_from_response(content: str) -> Dict[str, Any]:
    """Pull the JSON object out of a model reply, repairing common slop."""
    text = _ZERO_WIDTH.sub("", content or "")
    block = _json_block(text)
    if block is None:
        logger.error("No JSON object in model reply: %r", text[:500])
        raise PropertyDataError("Failed to extract valid JSON: No JSON object found in response")

    try:
        return json.loads(_clean(block))
    except json.JSONDecodeError as e:
        logger.warning("JSON parsing error (%s), retrying with aggressive cleanup", e)
    try:
        return json.loads(_clean_aggressive(block))
    except json.JSONDecodeError as e:
        logger.error("Attempted to parse: %r", block[:500])
        raise PropertyDataError("Failed to extract valid JSON: Failed to parse JSON after cleaning") from e


def _series_ok(block, a: str, b: str) -> bool:
    return (
        isinstance(block, dict)
        and isinstance(block.get(a), list)
        and isinstance(block.get(b), list)
        and len(block[a]) == len(block[b])
    )


def validate_property_data(data) -> List[str]:
    """Return a list of schema problems; empty means the record looks right."""
    if not isinstance(data, dict) or not isinstance(data.get("propertyData"), dict):
        return ["Missing propertyData object"]
    pd = data["propertyData"]
    errors = []

    for name, kind in REQUIRED_TYPES.items():
        if name not in pd:
            errors.append(f"Missing required field: {name}")
            continue
        value = pd[name]
        if kind == "number":
            ok = value is None or _is_number(value)
        elif kind == "string":
            ok = isinstance(value, str)
        else:
            ok = isinstance(value, dict)
        if not ok:
            errors.append(f"Invalid type for {name}: expected {kind}, got {type(value).__name__}")

    hood = pd.get("neighborhood")
    if isinstance(hood, dict):
        rating = hood.get("rating")
        if not _is_number(rating) or not 0 <= rating <= 10:
            errors.append("Invalid neighborhood rating: must be number between 0 and 10")
        if not isinstance(hood.get("description"), str):
            errors.append("Invalid neighborhood description: must be string")
        if not isinstance(hood.get("amenities"), list):
            errors.append("Invalid amenities: must be array")

    trends = pd.get("marketTrends")
    if isinstance(trends, dict):
        if not isinstance(trends.get("yearlyAppreciation"), str):
            errors.append("Invalid yearlyAppreciation: must be string")
        if not _is_number(trends.get("medianPrice")):
            errors.append("Invalid medianPrice: must be number")
        if not _is_number(trends.get("daysOnMarket")):
            errors.append("Invalid daysOnMarket: must be number")

    # Charts are optional, but must line up when present.
    if "marketHistory" in pd and not _series_ok(pd["marketHistory"], "years", "values"):
        errors.append("Invalid market history data")
    if "investmentProjection" in pd and not _series_ok(pd["investmentProjection"], "years", "returns"):
        errors.append("Invalid investment projection data")
    return errors


def _get(obj, path: str, default=None):
    for part in path.split("."):
        if not isinstance(obj, dict) or part not in obj:
            return default
        obj = obj[part]
    return default if obj is None else obj


def _number(value, default: float = 0) -> float:
    if isinstance(value, bool):
        return float(value)
    try:
        num = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(num):
        return default
    return int(num) if num.is_integer() else num


def _string(value, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip() or default


def _array(value) -> list:
    return [v for v in value if v] if isinstance(value, list) else []


def sanitize_property_data(data) -> Dict[str, Any]:
    if not isinstance(data, dict) or not isinstance(data.get("propertyData"), dict):
        raise PropertyDataError("Missing or invalid property data structure")

    last_sale = _get(data, "propertyData.lastSalePrice")
    out = {
        "estimatedValue": _number(_get(data, "propertyData.estimatedValue", 0)),
        "squareFootage": _number(_get(data, "propertyData.squareFootage", 0)),
        "yearBuilt": _number(_get(data, "propertyData.yearBuilt", 0)),
        "bedrooms": _number(_get(data, "propertyData.bedrooms", 0)),
        "bathrooms": _number(_get(data, "propertyData.bathrooms", 0)),
        "propertyType": _string(_get(data, "propertyData.propertyType"), "Not specified"),
        "lastSalePrice": None if last_sale is None else _number(last_sale, None),
        "lastSaleDate": _string(_get(data, "propertyData.lastSaleDate"), "No sale date available"),
        "lotSize": _string(_get(data, "propertyData.lotSize"), "Not specified"),
        "neighborhood": {
            "rating": min(10, max(0, _number(_get(data, "propertyData.neighborhood.rating", 0)))),
            "description": _string(_get(data, "propertyData.neighborhood.description"), "No description available"),
            "amenities": _array(_get(data, "propertyData.neighborhood.amenities", [])),
        },
        "marketTrends": {
            "yearlyAppreciation": _string(_get(data, "propertyData.marketTrends.yearlyAppreciation"), "Not available"),
            "medianPrice": _number(_get(data, "propertyData.marketTrends.medianPrice", 0)),
            "daysOnMarket": _number(_get(data, "propertyData.marketTrends.daysOnMarket", 0)),
        },
    }

    history = _get(data, "propertyData.marketHistory")
    if _series_ok(history, "years", "values"):
        out["marketHistory"] = {"years": list(history["years"]), "values": [_number(v) for v in history["values"]]}
    projection = _get(data, "propertyData.investmentProjection")
    if _series_ok(projection, "years", "returns"):
        out["investmentProjection"] = {
            "years": list(projection["years"]),
            "returns": [_number(v) for v in projection["returns"]],
        }
    return {"propertyData": out}


def lookup_property(address: str, city: str, state: str, client=None) -> Dict[str, Any]:
    client = client or perplexity_client()
    logger.info("Looking up property: %s, %s, %s", address, city, state)
    resp = client.chat.completions.create(
        model=model_name(),
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": f"Find property details for {address}, {city}, {state}. Include a realistic estimated value.",
            },
        ],
    )
    content = resp.choices[0].message.content
    logger.debug("Raw model reply: %s", content)

    raw = extract_json_from_response(content)
    problems = validate_property_data(raw)
    if problems:
        logger.warning("Property data validation: %s", "; ".join(problems))
    return sanitize_property_data(raw)
