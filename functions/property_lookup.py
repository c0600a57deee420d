"""POST {address, city, state} -> {"propertyData": {...}}."""
import logging

from openai import OpenAIError

from ai.client import LookupConfigError
from ai.property_lookup import PropertyDataError, lookup_property
from functions.http_utils import BadRequest, error, json_body, preflight_or_method_error, response, text_field

logger = logging.getLogger(__name__)


def handler(event, context=None, client=None):
    early = preflight_or_method_error(event)
    if early is not None:
        return early

    try:
        body = json_body(event)
        address = text_field(body, "address", required=True)
        city = text_field(body, "city")
        state = text_field(body, "state")
    except BadRequest as e:
        return error(400, "Invalid request", e)

    try:
        data = lookup_property(address, city, state, client=client)
    except (LookupConfigError, PropertyDataError, OpenAIError) as e:
        logger.exception("Error in property lookup")
        return error(500, "Failed to fetch property data", e)
    return response(200, data)
