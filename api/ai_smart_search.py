"""Serverless function: POST /api/ai/smart-search."""

from cocina_ai.core import endpoints
from cocina_ai.serverless import make_handler

handler = make_handler(endpoints.smart_search)
