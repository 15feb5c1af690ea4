"""FastAPI application for Cocina AI."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response

from config.settings import get_settings
from cocina_ai.core import endpoints
from cocina_ai.core.context import build_context
from cocina_ai.core.endpoints import EndpointRequest, EndpointResponse

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Every verb reaches the endpoint contract, which answers preflight and 405 itself.
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting Cocina AI application...")

    # Tests may install their own context before startup.
    if getattr(app.state, "context", None) is None:
        app.state.context = build_context(get_settings())

    gateway = app.state.context.gateway
    logger.info(f"AI gateway state: {gateway.state.value} ({gateway.status_message()})")

    yield

    logger.info("Shutting down Cocina AI application...")


settings = get_settings()

app = FastAPI(
    title="Cocina AI API",
    description="Chilean recipe catalog with AI-powered substitutions, meal plans, shopping lists and search",
    version=settings.app_version,
    lifespan=lifespan
)
app.state.context = None


def to_response(result: EndpointResponse) -> Response:
    return Response(content=result.content, status_code=result.status_code, headers=result.headers)


async def dispatch(request: Request, endpoint) -> Response:
    """Run an endpoint of the shared contract in a worker thread."""
    body = await request.body()
    endpoint_request = EndpointRequest(
        method=request.method,
        body=body.decode("utf-8", errors="replace"),
        query=dict(request.query_params),
        path_params=dict(request.path_params)
    )
    result = await asyncio.to_thread(endpoint, endpoint_request, request.app.state.context)
    return to_response(result)


@app.api_route("/api/ai/status", methods=ALL_METHODS, tags=["AI"])
async def ai_status(request: Request):
    """Check whether AI features are configured."""
    return await dispatch(request, endpoints.ai_status)


@app.api_route("/api/ai/ingredient-substitution", methods=ALL_METHODS, tags=["AI"])
async def ingredient_substitution(request: Request):
    """
    Suggest substitutes for an ingredient.

    - **ingredient**: Ingredient to replace (required)
    - **dietaryRestrictions**: Restrictions the substitutes must respect
    - **recipeContext**: Dish the ingredient is used in
    """
    return await dispatch(request, endpoints.ingredient_substitution)


@app.api_route("/api/ai/shopping-list", methods=ALL_METHODS, tags=["AI"])
async def shopping_list(request: Request):
    """
    Build a consolidated shopping list.

    - **recipes**: List of `{name, ingredients}` (at least one)
    - **preferences**: storeLayout, budget, dietaryRestrictions, servings
    """
    return await dispatch(request, endpoints.shopping_list)


@app.api_route("/api/ai/meal-plan", methods=ALL_METHODS, tags=["AI"])
async def meal_plan(request: Request):
    """
    Plan a week of Chilean meals.

    - **preferences**: skillLevel, prepTime, budget, dietaryGoals, dietaryRestrictions
    """
    return await dispatch(request, endpoints.meal_plan)


@app.api_route("/api/ai/smart-search", methods=ALL_METHODS, tags=["AI"])
async def smart_search(request: Request):
    """Get dish suggestions for a free-text cooking problem (**query**)."""
    return await dispatch(request, endpoints.smart_search)


@app.api_route("/api/recipes/search", methods=ALL_METHODS, tags=["Recipes"])
async def recipe_search(request: Request):
    """Search the recipe catalog with the `q` query parameter."""
    return await dispatch(request, endpoints.recipe_search)


@app.api_route("/api/recipes/{recipe_id}", methods=ALL_METHODS, tags=["Recipes"])
async def recipe_detail(request: Request):
    """Get a specific recipe by ID."""
    return await dispatch(request, endpoints.recipe_detail)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cocina_ai.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
