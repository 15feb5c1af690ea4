"""Serverless function: GET /api/ai/status."""

from cocina_ai.core import endpoints
from cocina_ai.serverless import make_handler

handler = make_handler(endpoints.ai_status)
