"""Core application modules."""

from .sanitizer import sanitize, sanitize_list
from .model_interface import GatewayError, GatewayState, ModelGateway
from .ai_service import AIService
from .data_loader import DataLoader, Recipe
from .context import AppContext, build_context

__all__ = [
    "sanitize",
    "sanitize_list",
    "GatewayError",
    "GatewayState",
    "ModelGateway",
    "AIService",
    "DataLoader",
    "Recipe",
    "AppContext",
    "build_context",
]
