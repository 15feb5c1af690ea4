"""Serverless function: GET /api/recipes/{recipe_id}."""

from cocina_ai.core import endpoints
from cocina_ai.serverless import make_handler

handler = make_handler(endpoints.recipe_detail, path_param="recipe_id")
