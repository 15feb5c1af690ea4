"""Per-process application context shared by the server and the serverless functions."""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from cachetools import TTLCache

from config.settings import Settings, get_settings
from .ai_service import AIService
from .data_loader import DataLoader, get_data_loader
from .model_interface import BaseModelInterface, ModelGateway

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a request handler needs, built once per process."""
    settings: Settings
    gateway: ModelGateway
    ai_service: AIService
    catalog: DataLoader
    search_cache: TTLCache
    search_lock: threading.Lock = field(default_factory=threading.Lock)


def build_context(
    settings: Optional[Settings] = None,
    interface_factory: Optional[Callable[[], BaseModelInterface]] = None
) -> AppContext:
    """Create the gateway, AI service and catalog for this process."""
    settings = settings or get_settings()

    gateway = ModelGateway.from_settings(settings, interface_factory=interface_factory)

    try:
        catalog = get_data_loader(settings.data_dir, settings.recipes_file)
        logger.info(f"Loaded {catalog.recipe_count} recipes")
    except FileNotFoundError as e:
        logger.error(f"Failed to load recipes: {e}")
        catalog = DataLoader(settings.data_dir)

    return AppContext(
        settings=settings,
        gateway=gateway,
        ai_service=AIService(gateway),
        catalog=catalog,
        search_cache=TTLCache(maxsize=settings.cache_maxsize, ttl=settings.cache_ttl),
    )
