"""POST {message} -> {message, citations}."""
import logging

from openai import OpenAIError

from ai.chat import EmptyReplyError, ask_token_ai
from ai.client import LookupConfigError, perplexity_key
from functions.http_utils import BadRequest, error, json_body, preflight_or_method_error, response, text_field

logger = logging.getLogger(__name__)


def handler(event, context=None, client=None):
    early = preflight_or_method_error(event)
    if early is not None:
        return early

    if client is None:
        try:
            perplexity_key(require_prefix=True)
        except LookupConfigError as e:
            logger.error("API key not properly configured")
            return error(500, "Configuration error", e)

    try:
        message = text_field(json_body(event), "message", required=True)
    except BadRequest as e:
        return error(400, "Invalid request", e)

    try:
        return response(200, ask_token_ai(message, client=client))
    except (EmptyReplyError, OpenAIError) as e:
        logger.exception("Chat request failed")
        return error(500, "Failed to process request", e)
