"""Serverless function: POST /api/ai/ingredient-substitution."""

from cocina_ai.core import endpoints
from cocina_ai.serverless import make_handler

handler = make_handler(endpoints.ingredient_substitution)
