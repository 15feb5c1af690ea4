"""Shared fixtures and fake model interfaces."""

from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient

from config.settings import PROJECT_ROOT, Settings
from cocina_ai.core.context import build_context
from cocina_ai.core.model_interface import BaseModelInterface

VALID_KEY = "test-gemini-key-0123456789"


class FakeInterface(BaseModelInterface):
    """Returns a fixed reply and records every prompt."""

    def __init__(self, reply: str = "[]"):
        self.reply = reply
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply

    def is_loaded(self) -> bool:
        return True

    def get_model_name(self) -> str:
        return "fake-model"


class FailingInterface(BaseModelInterface):
    """Simulates a provider error (auth, quota, transport)."""

    def __init__(self):
        self.calls = 0

    def generate(self, prompt: str) -> str:
        self.calls += 1
        raise RuntimeError("429 quota exceeded")

    def is_loaded(self) -> bool:
        return True

    def get_model_name(self) -> str:
        return "failing-model"


class CountingFactory:
    """Interface factory that counts how many clients were built."""

    def __init__(self, interface: BaseModelInterface):
        self.interface = interface
        self.calls = 0

    def __call__(self) -> BaseModelInterface:
        self.calls += 1
        return self.interface


def make_settings(**overrides) -> Settings:
    values = {
        "gemini_api_key": VALID_KEY,
        "use_mock": False,
        "data_dir": str(PROJECT_ROOT / "data"),
        "recipes_file": "recipes.json",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_context(interface=None, **settings_overrides):
    """Build an AppContext whose gateway uses ``interface`` (or a CountingFactory)."""
    factory = interface if isinstance(interface, CountingFactory) else None
    if factory is None and interface is not None:
        factory = CountingFactory(interface)
    return build_context(make_settings(**settings_overrides), interface_factory=factory)


@contextmanager
def client_for(context):
    """TestClient for the FastAPI app running with ``context``."""
    from cocina_ai.main import app

    app.state.context = context
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.state.context = None


@pytest.fixture
def fake_model():
    return FakeInterface()


@pytest.fixture
def failing_model():
    return FailingInterface()
