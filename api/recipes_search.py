"""Serverless function: GET /api/recipes/search."""

from cocina_ai.core import endpoints
from cocina_ai.serverless import make_handler

handler = make_handler(endpoints.recipe_search)
