"""Adapter between AWS Lambda / Netlify proxy events and the endpoint contract."""

import base64
import logging
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

from config.settings import get_settings
from cocina_ai.core.context import AppContext, build_context
from cocina_ai.core.endpoints import EndpointRequest, EndpointResponse

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

Endpoint = Callable[[EndpointRequest, AppContext], EndpointResponse]


@lru_cache(maxsize=1)
def get_context() -> AppContext:
    """Build the context once per warm function instance."""
    logger.info("Initializing function context")
    return build_context(get_settings())


def _event_method(event: Dict[str, Any]) -> str:
    method = event.get("httpMethod")
    if not method:
        method = event.get("requestContext", {}).get("http", {}).get("method", "GET")
    return method


def _event_body(event: Dict[str, Any]) -> str:
    body = event.get("body") or ""
    if event.get("isBase64Encoded") and body:
        body = base64.b64decode(body).decode("utf-8", errors="replace")
    return body


def request_from_event(event: Dict[str, Any], path_param: Optional[str] = None) -> EndpointRequest:
    """
    Translate a proxy event into an ``EndpointRequest``.

    When ``path_param`` is given but the event carries no path parameters
    (Netlify redirects), the last segment of the request path is used.
    """
    path_params = dict(event.get("pathParameters") or {})
    if path_param and path_param not in path_params:
        path = event.get("path") or event.get("rawPath") or ""
        path_params[path_param] = path.rstrip("/").rsplit("/", 1)[-1]

    return EndpointRequest(
        method=_event_method(event),
        body=_event_body(event),
        query=dict(event.get("queryStringParameters") or {}),
        path_params=path_params
    )


def to_lambda_response(result: EndpointResponse) -> Dict[str, Any]:
    return {
        "statusCode": result.status_code,
        "headers": result.headers,
        "body": result.content,
    }


def make_handler(endpoint: Endpoint, path_param: Optional[str] = None):
    """Create a ``handler(event, context)`` function for one endpoint."""
    def handler(event, context=None):
        request = request_from_event(event or {}, path_param)
        return to_lambda_response(endpoint(request, get_context()))

    handler.__name__ = f"{endpoint.__name__}_handler"
    return handler
