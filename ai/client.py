from typing import Optional

from openai import OpenAI

from tools.settings import settings


class LookupConfigError(Exception):
    pass


def perplexity_key(require_prefix: bool = False) -> str:
    key = settings()["perplexity"].get("api_key") or ""
    if not key:
        raise LookupConfigError("PERPLEXITY_API_KEY environment variable is not set")
    if require_prefix and not key.startswith("pplx-"):
        raise LookupConfigError("API key not properly configured")
    return key


def perplexity_client(api_key: Optional[str] = None) -> OpenAI:
    """OpenAI SDK pointed at Perplexity's compatible chat-completions endpoint."""
    cfg = settings()["perplexity"]
    return OpenAI(
        api_key=api_key or perplexity_key(),
        base_url=cfg["base_url"],
        timeout=cfg["timeout_seconds"],
    )


def model_name() -> str:
    return settings()["perplexity"]["model"]
