"""Model interface and gateway for Gemini integration."""

import json
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional

from google import genai
from google.genai import types

from config.settings import MIN_API_KEY_LENGTH, PLACEHOLDER_API_KEY, STATUS_MESSAGES

logger = logging.getLogger(__name__)


class BaseModelInterface(ABC):
    """Abstract base class for model interfaces."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Generate text from prompt."""
        pass

    @abstractmethod
    def is_loaded(self) -> bool:
        """Check if the client is ready."""
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """Get model name."""
        pass


class MockModelInterface(BaseModelInterface):
    """Mock model interface returning canned JSON, for offline development and tests."""

    def __init__(self):
        self._loaded = True
        self._name = "mock-cocina-model"

    def generate(self, prompt: str) -> str:
        """Return a canned JSON document matching the feature the prompt asks for."""
        opening = prompt.lstrip()
        if opening.startswith("As a culinary expert"):
            payload = [{
                "substitute": "Merkén-spiced olive oil",
                "ratio": "1:1",
                "reason": "Keeps the smoky heat typical of Chilean cooking",
                "notes": "Add at the end of cooking to preserve aroma",
            }]
        elif opening.startswith("Create an optimized shopping list"):
            payload = {
                "sections": [{
                    "name": "Produce",
                    "items": [{
                        "item": "onions",
                        "quantity": "1 kg",
                        "notes": "Choose firm bulbs",
                        "estimated_cost": "$1-2",
                    }],
                }],
                "total_estimated_cost": "$1-2",
                "money_saving_tips": ["Buy produce at the feria"],
            }
        elif opening.startswith("Create a balanced 7-day"):
            day = {
                "day": "Monday",
                "breakfast": {"dish": "Marraqueta con palta", "prep_time": "10 minutes",
                              "difficulty": "easy", "key_ingredients": ["bread", "avocado"]},
                "lunch": {"dish": "Porotos granados", "prep_time": "60 minutes",
                          "difficulty": "medium", "key_ingredients": ["beans", "corn", "squash"]},
                "dinner": {"dish": "Cazuela de ave", "prep_time": "90 minutes",
                           "difficulty": "medium", "key_ingredients": ["chicken", "potatoes"]},
                "prep_notes": "Soak the beans overnight",
            }
            payload = {
                "week_plan": [day],
                "shopping_strategy": {"ingredient_overlap": ["corn"], "prep_ahead_items": ["beans"],
                                      "skill_progression": "Stews first, pastries later"},
                "weekly_nutrition_balance": "Legumes and vegetables daily",
                "estimated_total_cost": "Moderate",
            }
        else:
            payload = {
                "primary_suggestions": [{
                    "dish_name": "Pebre",
                    "description": "Fresh Chilean salsa",
                    "ingredients_needed": ["tomato", "onion", "cilantro"],
                    "prep_time": "15 minutes",
                    "difficulty": "easy",
                    "cooking_tips": "Let it rest for 30 minutes",
                }],
                "alternative_options": [{"option": "Chancho en piedra",
                                         "explanation": "Mortar-ground version of pebre"}],
                "general_advice": "Use ripe summer tomatoes",
            }
        return json.dumps(payload)

    def is_loaded(self) -> bool:
        return self._loaded

    def get_model_name(self) -> str:
        return self._name


class GeminiInterface(BaseModelInterface):
    """Interface for Google Gemini through the google-genai SDK."""

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash", temperature: float = 0.7):
        self._client: Optional[genai.Client] = None
        self._api_key = api_key
        self._model_name = model_name
        self._temperature = temperature

    def load(self) -> None:
        """Construct the SDK client."""
        logger.info(f"Creating Gemini client for model {self._model_name}")
        self._client = genai.Client(api_key=self._api_key)

    def generate(self, prompt: str) -> str:
        """Run one generate_content round trip and return the raw text."""
        if self._client is None:
            self.load()

        response = self._client.models.generate_content(
            model=self._model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=self._temperature,
                response_mime_type="application/json",
            ),
        )
        return response.text or ""

    def is_loaded(self) -> bool:
        return self._client is not None

    def get_model_name(self) -> str:
        return self._model_name


class GatewayState(str, Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"


class CredentialStatus(str, Enum):
    OK = "ok"
    MOCK = "mock"
    MISSING = "missing"
    PLACEHOLDER = "placeholder"
    TOO_SHORT = "too_short"


class GatewayErrorKind(str, Enum):
    UNCONFIGURED = "unconfigured"
    UPSTREAM_FAILURE = "upstream_failure"


class GatewayError(Exception):
    """Raised when the gateway cannot produce model text."""

    def __init__(self, kind: GatewayErrorKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.cause = cause


def check_credential(api_key: Optional[str]) -> CredentialStatus:
    """Classify a Gemini API key without contacting the provider."""
    if not api_key:
        return CredentialStatus.MISSING
    if api_key == PLACEHOLDER_API_KEY:
        return CredentialStatus.PLACEHOLDER
    if len(api_key) < MIN_API_KEY_LENGTH:
        return CredentialStatus.TOO_SHORT
    return CredentialStatus.OK


class ModelGateway:
    """Owns the single model client of a process and its configuration state."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = "gemini-2.5-flash",
        temperature: float = 0.7,
        use_mock: bool = False,
        interface_factory: Optional[Callable[[], BaseModelInterface]] = None
    ):
        self._api_key = api_key
        self._model_name = model_name
        self._temperature = temperature
        self._use_mock = use_mock
        self._interface_factory = interface_factory or self._default_factory
        self._interface: Optional[BaseModelInterface] = None
        self._credential_status = CredentialStatus.MISSING
        self._state = self.configure()

    @classmethod
    def from_settings(cls, settings, interface_factory=None) -> "ModelGateway":
        return cls(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
            temperature=settings.temperature,
            use_mock=settings.use_mock,
            interface_factory=interface_factory
        )

    def _default_factory(self) -> BaseModelInterface:
        if self._use_mock:
            return MockModelInterface()
        return GeminiInterface(
            api_key=self._api_key,
            model_name=self._model_name,
            temperature=self._temperature
        )

    def configure(self) -> GatewayState:
        """Classify the credential and derive the gateway state."""
        if self._use_mock:
            self._credential_status = CredentialStatus.MOCK
        else:
            self._credential_status = check_credential(self._api_key)

        if self._credential_status in (CredentialStatus.OK, CredentialStatus.MOCK):
            logger.info(f"AI gateway configured ({self._credential_status.value})")
            return GatewayState.CONFIGURED

        logger.warning(f"Gemini API key not configured ({self._credential_status.value}). AI features are disabled.")
        return GatewayState.UNCONFIGURED

    @property
    def state(self) -> GatewayState:
        return self._state

    @property
    def credential_status(self) -> CredentialStatus:
        return self._credential_status

    def is_configured(self) -> bool:
        return self._state == GatewayState.CONFIGURED

    def status_message(self) -> str:
        return STATUS_MESSAGES[self._credential_status.value]

    def _get_interface(self) -> BaseModelInterface:
        # A cold-start race may build two clients; the last one wins and both are equivalent.
        if self._interface is None:
            self._interface = self._interface_factory()
        return self._interface

    def call(self, prompt: str) -> str:
        """Send one prompt to the model and return its raw text."""
        if not self.is_configured():
            raise GatewayError(
                GatewayErrorKind.UNCONFIGURED,
                "AI service not configured. Please add your Gemini API key to the .env file."
            )

        try:
            return self._get_interface().generate(prompt)
        except Exception as e:
            logger.error(f"AI service error: {e}")
            raise GatewayError(
                GatewayErrorKind.UPSTREAM_FAILURE,
                "Failed to generate AI response",
                cause=e
            ) from e
