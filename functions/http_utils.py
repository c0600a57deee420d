import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Content-Type": "application/json",
}


class BadRequest(Exception):
    pass


def response(status: int, body: Optional[Any] = None) -> Dict[str, Any]:
    return {
        "statusCode": status,
        "headers": dict(CORS_HEADERS),
        "body": "" if body is None else json.dumps(body),
    }


def preflight_or_method_error(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    method = (event.get("httpMethod") or "").upper()
    if method == "OPTIONS":
        return response(204)
    if method != "POST":
        return response(405, {"error": "Method Not Allowed"})
    return None


def json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    try:
        body = json.loads(event.get("body") or "")
    except json.JSONDecodeError as e:
        raise BadRequest(f"Request body is not valid JSON: {e.msg}") from e
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")
    return body


def error(status: int, message: str, exc: BaseException, **extra) -> Dict[str, Any]:
    payload = {
        "error": message,
        "details": str(exc),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "errorType": type(exc).__name__,
    }
    payload.update(extra)
    return response(status, payload)


def text_field(body: Dict[str, Any], name: str, required: bool = False) -> str:
    value = body.get(name)
    if value is None:
        value = ""
    if not isinstance(value, str):
        raise BadRequest(f"{name} must be a string")
    value = value.strip()
    if required and not value:
        raise BadRequest(f"{name} is required")
    return value
