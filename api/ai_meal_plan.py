"""Serverless function: POST /api/ai/meal-plan."""

from cocina_ai.core import endpoints
from cocina_ai.serverless import make_handler

handler = make_handler(endpoints.meal_plan)
