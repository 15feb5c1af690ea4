"""Unit tests for the model gateway and interfaces."""

import json

import pytest

from config.settings import PLACEHOLDER_API_KEY
from cocina_ai.core import model_interface
from cocina_ai.core.model_interface import (
    CredentialStatus,
    GatewayError,
    GatewayErrorKind,
    GatewayState,
    GeminiInterface,
    MockModelInterface,
    ModelGateway,
    check_credential,
)

from conftest import VALID_KEY, CountingFactory, FailingInterface, FakeInterface, make_settings


class TestCheckCredential:

    @pytest.mark.parametrize("api_key, expected", [
        (None, CredentialStatus.MISSING),
        ("", CredentialStatus.MISSING),
        (PLACEHOLDER_API_KEY, CredentialStatus.PLACEHOLDER),
        ("short", CredentialStatus.TOO_SHORT),
        ("0123456789", CredentialStatus.TOO_SHORT),
        ("0123456789a", CredentialStatus.OK),
        (VALID_KEY, CredentialStatus.OK),
    ])
    def test_classification(self, api_key, expected):
        assert check_credential(api_key) == expected


class TestModelGateway:

    def test_configured_with_valid_key(self):
        gateway = ModelGateway(api_key=VALID_KEY)

        assert gateway.state == GatewayState.CONFIGURED
        assert gateway.is_configured()
        assert gateway.status_message() == "AI features are available"

    @pytest.mark.parametrize("api_key, message", [
        (None, "GEMINI_API_KEY environment variable not set"),
        (PLACEHOLDER_API_KEY, "Please replace placeholder API key with your actual Gemini API key"),
        ("abc", "GEMINI_API_KEY appears to be invalid (too short)"),
    ])
    def test_unconfigured_messages(self, api_key, message):
        gateway = ModelGateway(api_key=api_key)

        assert gateway.state == GatewayState.UNCONFIGURED
        assert not gateway.is_configured()
        assert gateway.status_message() == message

    def test_mock_mode_needs_no_key(self):
        gateway = ModelGateway(api_key=None, use_mock=True)

        assert gateway.is_configured()
        assert gateway.credential_status == CredentialStatus.MOCK
        assert json.loads(gateway.call("As a culinary expert, suggest..."))[0]["ratio"] == "1:1"

    def test_unconfigured_call_never_builds_client(self):
        """No client is built and no request is attempted without a key."""
        factory = CountingFactory(FakeInterface())
        gateway = ModelGateway(api_key=None, interface_factory=factory)

        with pytest.raises(GatewayError) as exc_info:
            gateway.call("prompt")

        assert exc_info.value.kind == GatewayErrorKind.UNCONFIGURED
        assert factory.calls == 0
        assert factory.interface.prompts == []

    def test_call_returns_raw_text(self):
        gateway = ModelGateway(api_key=VALID_KEY, interface_factory=lambda: FakeInterface('{"a": 1}'))

        assert gateway.call("prompt") == '{"a": 1}'

    def test_client_is_built_once(self):
        """The client is created lazily and reused across calls."""
        factory = CountingFactory(FakeInterface())
        gateway = ModelGateway(api_key=VALID_KEY, interface_factory=factory)

        assert factory.calls == 0
        gateway.call("one")
        gateway.call("two")

        assert factory.calls == 1
        assert factory.interface.prompts == ["one", "two"]

    def test_provider_error_becomes_upstream_failure(self):
        failing = FailingInterface()
        gateway = ModelGateway(api_key=VALID_KEY, interface_factory=lambda: failing)

        with pytest.raises(GatewayError) as exc_info:
            gateway.call("prompt")

        assert exc_info.value.kind == GatewayErrorKind.UPSTREAM_FAILURE
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert failing.calls == 1

    def test_from_settings(self):
        settings = make_settings(gemini_model="gemini-test", temperature=0.2)

        gateway = ModelGateway.from_settings(settings)

        assert gateway.is_configured()
        interface = gateway._default_factory()
        assert isinstance(interface, GeminiInterface)
        assert interface.get_model_name() == "gemini-test"


class TestMockModelInterface:

    @pytest.mark.parametrize("opening, expected_type", [
        ("As a culinary expert, suggest", list),
        ("Create an optimized shopping list", dict),
        ("Create a balanced 7-day Chilean cuisine meal plan", dict),
        ("As a Chilean cuisine expert, help", dict),
    ])
    def test_returns_json_per_feature(self, opening, expected_type):
        reply = MockModelInterface().generate(opening)

        assert isinstance(json.loads(reply), expected_type)

    def test_is_loaded(self):
        mock = MockModelInterface()

        assert mock.is_loaded()
        assert mock.get_model_name() == "mock-cocina-model"


class _FakeModels:
    def __init__(self):
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})

        class _Response:
            text = '["ok"]'
        return _Response()


class _FakeClient:
    instances = []

    def __init__(self, api_key):
        self.api_key = api_key
        self.models = _FakeModels()
        _FakeClient.instances.append(self)


class TestGeminiInterface:

    def test_generate_uses_sdk_client(self, monkeypatch):
        _FakeClient.instances = []
        monkeypatch.setattr(model_interface.genai, "Client", _FakeClient)
        interface = GeminiInterface(api_key=VALID_KEY, model_name="gemini-test", temperature=0.3)

        assert not interface.is_loaded()
        text = interface.generate("hola")

        assert text == '["ok"]'
        assert interface.is_loaded()
        client = _FakeClient.instances[0]
        assert client.api_key == VALID_KEY
        call = client.models.calls[0]
        assert call["model"] == "gemini-test"
        assert call["contents"] == "hola"
        assert call["config"].response_mime_type == "application/json"
        assert call["config"].temperature == 0.3

    def test_client_created_once(self, monkeypatch):
        _FakeClient.instances = []
        monkeypatch.setattr(model_interface.genai, "Client", _FakeClient)
        interface = GeminiInterface(api_key=VALID_KEY)

        interface.generate("a")
        interface.generate("b")

        assert len(_FakeClient.instances) == 1
