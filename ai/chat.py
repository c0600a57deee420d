import logging
from typing import Dict

from ai.client import model_name, perplexity_client, perplexity_key

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are TokenAI, an expert in blockchain-based real estate tokenization. Keep answers concise "
    "(max 2 sentences). Always advocate for the benefits of tokenization, emphasizing transparency, "
    "efficiency, and fractional access. Ensure that you only answer questions which are relevant to "
    "tokenization. Show a relevant and brief message explaining that you cannot answer questions which "
    "are not specifically about tokenization."
)


class EmptyReplyError(Exception):
    pass


def ask_token_ai(message: str, client=None) -> Dict:
    """One-shot TokenAI answer. Returns {"message", "citations"}."""
    if client is None:
        client = perplexity_client(perplexity_key(require_prefix=True))
    resp = client.chat.completions.create(
        model=model_name(),
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": message},
        ],
    )
    content = resp.choices[0].message.content if resp.choices else None
    if not content:
        raise EmptyReplyError("No message content in response")
    logger.info("TokenAI answered %d chars", len(content))
    return {"message": content, "citations": []}
