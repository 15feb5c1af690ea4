"""Serverless function: POST /api/ai/shopping-list."""

from cocina_ai.core import endpoints
from cocina_ai.serverless import make_handler

handler = make_handler(endpoints.shopping_list)
