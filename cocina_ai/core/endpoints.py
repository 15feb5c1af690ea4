"""
Transport-independent endpoint contract.

Each endpoint takes an ``EndpointRequest`` and the process ``AppContext`` and
returns an ``EndpointResponse``. The FastAPI server and the serverless
functions are thin adapters around these functions, so both deployments
answer identically.

Request handling order: CORS preflight, method check, AI configuration
check (model-backed endpoints only), input validation, execution.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

from cocina_ai.models.schemas import (
    ErrorResponse,
    MealPlanResponse,
    ShoppingListResponse,
    SmartSearchResponse,
    StatusResponse,
    SubstitutionResponse,
)
from .context import AppContext
from .interpreter import strict_loads

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}

NOT_CONFIGURED_ERROR = "AI service not configured"
NOT_CONFIGURED_MESSAGE = "Please configure your Gemini API key"


class ValidationError(Exception):
    """Client input is missing or malformed (HTTP 400)."""


@dataclass
class EndpointRequest:
    method: str
    body: str = ""
    query: Dict[str, str] = field(default_factory=dict)
    path_params: Dict[str, str] = field(default_factory=dict)


@dataclass
class EndpointResponse:
    status_code: int
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def content(self) -> str:
        """Serialized body; empty for preflight responses."""
        return "" if self.body is None else json.dumps(self.body, allow_nan=False)


def respond(status_code: int, body: Any = None) -> EndpointResponse:
    headers = dict(CORS_HEADERS)
    if body is not None:
        headers["Content-Type"] = "application/json"
    return EndpointResponse(status_code=status_code, body=body, headers=headers)


def error_response(status_code: int, error: str, message: Optional[str] = None) -> EndpointResponse:
    body = ErrorResponse(error=error, message=message).model_dump(exclude_none=True)
    return respond(status_code, body)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2024-05-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_json_body(raw: Optional[str]) -> Dict[str, Any]:
    """Decode a request body. An empty body is an empty object."""
    if not raw or not raw.strip():
        return {}
    try:
        payload = strict_loads(raw)
    except ValueError:
        raise ValidationError("Invalid JSON body")
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON body")
    return payload


def _require_text(payload: Dict[str, Any], key: str, message: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value


def _optional_object(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, dict) else {}


def endpoint(method: str, failure: str, requires_model: bool = False):
    """Wrap an endpoint body with the shared preflight, method, configuration and error handling."""
    def decorator(func: Callable[[EndpointRequest, AppContext], EndpointResponse]):
        @wraps(func)
        def wrapper(request: EndpointRequest, context: AppContext) -> EndpointResponse:
            verb = request.method.upper()
            if verb == "OPTIONS":
                return respond(200)
            if verb != method:
                return error_response(405, "Method not allowed")
            if requires_model and not context.gateway.is_configured():
                return error_response(503, NOT_CONFIGURED_ERROR, NOT_CONFIGURED_MESSAGE)

            try:
                return func(request, context)
            except ValidationError as e:
                return error_response(400, str(e))
            except Exception as e:
                logger.exception(f"{failure}: {e}")
                return error_response(500, failure, str(e))
        return wrapper
    return decorator


@endpoint("GET", "Internal server error")
def ai_status(request: EndpointRequest, context: AppContext) -> EndpointResponse:
    """Report whether a usable Gemini key is configured."""
    gateway = context.gateway
    status = StatusResponse(configured=gateway.is_configured(), message=gateway.status_message())
    return respond(200, status.model_dump())


@endpoint("POST", "Failed to generate ingredient substitutions", requires_model=True)
def ingredient_substitution(request: EndpointRequest, context: AppContext) -> EndpointResponse:
    payload = parse_json_body(request.body)
    ingredient = _require_text(payload, "ingredient", "Ingredient is required")

    substitutions = context.ai_service.get_ingredient_substitutions(
        ingredient,
        payload.get("dietaryRestrictions") or [],
        payload.get("recipeContext") or ""
    )
    envelope = SubstitutionResponse(
        ingredient=ingredient,
        substitutions=substitutions,
        generated_at=utc_timestamp()
    )
    return respond(200, envelope.model_dump())


@endpoint("POST", "Failed to generate shopping list", requires_model=True)
def shopping_list(request: EndpointRequest, context: AppContext) -> EndpointResponse:
    payload = parse_json_body(request.body)
    recipes = payload.get("recipes")
    if not isinstance(recipes, list) or not recipes:
        raise ValidationError("At least one recipe is required")

    result = context.ai_service.generate_shopping_list(recipes, _optional_object(payload, "preferences"))
    envelope = ShoppingListResponse(
        shopping_list=result,
        recipe_count=len(recipes),
        generated_at=utc_timestamp()
    )
    return respond(200, envelope.model_dump())


@endpoint("POST", "Failed to generate meal plan", requires_model=True)
def meal_plan(request: EndpointRequest, context: AppContext) -> EndpointResponse:
    payload = parse_json_body(request.body)
    preferences = _optional_object(payload, "preferences")

    result = context.ai_service.create_meal_plan(preferences)
    envelope = MealPlanResponse(
        meal_plan=result,
        preferences_used=preferences,
        generated_at=utc_timestamp()
    )
    return respond(200, envelope.model_dump())


@endpoint("POST", "Failed to generate smart suggestions", requires_model=True)
def smart_search(request: EndpointRequest, context: AppContext) -> EndpointResponse:
    payload = parse_json_body(request.body)
    query = _require_text(payload, "query", "Search query is required")

    suggestions = context.ai_service.smart_search(query.strip())
    envelope = SmartSearchResponse(
        query=query,
        suggestions=suggestions,
        generated_at=utc_timestamp()
    )
    return respond(200, envelope.model_dump())


@endpoint("GET", "Failed to search recipes")
def recipe_search(request: EndpointRequest, context: AppContext) -> EndpointResponse:
    """Filter the mock catalog by name, description or ingredient."""
    query = request.query.get("q", "") or ""
    cache_key = query.lower()

    with context.search_lock:
        cached: Optional[List[dict]] = context.search_cache.get(cache_key)
    if cached is not None:
        logger.info("Returning cached recipe search")
        return respond(200, cached)

    results = [recipe.to_summary() for recipe in context.catalog.search(query)]
    with context.search_lock:
        context.search_cache[cache_key] = results
    return respond(200, results)


@endpoint("GET", "Failed to load recipe")
def recipe_detail(request: EndpointRequest, context: AppContext) -> EndpointResponse:
    raw_id = request.path_params.get("recipe_id", "")
    try:
        recipe_id = int(str(raw_id).strip())
    except ValueError:
        return error_response(404, "Recipe not found")

    recipe = context.catalog.get_recipe_by_id(recipe_id)
    if recipe is None:
        return error_response(404, "Recipe not found")
    return respond(200, recipe.to_detail())

