"""Tests for the serverless function handlers."""

import base64
import json

import pytest

from cocina_ai import serverless
from cocina_ai.core.model_interface import MockModelInterface
from cocina_ai.serverless import request_from_event

from api import (
    ai_ingredient_substitution,
    ai_meal_plan,
    ai_smart_search,
    ai_status,
    recipe_detail,
    recipes_search,
)

from conftest import CountingFactory, FakeInterface, client_for, make_context


@pytest.fixture
def use_context(monkeypatch):
    """Install a context for the handlers instead of building one from the environment."""
    def install(context):
        monkeypatch.setattr(serverless, "get_context", lambda: context)
        return context
    return install


def body_of(result):
    return json.loads(result["body"])


class TestRequestFromEvent:

    def test_rest_api_event(self):
        request = request_from_event({
            "httpMethod": "POST",
            "body": '{"query": "corn"}',
            "queryStringParameters": None,
        })

        assert request.method == "POST"
        assert request.body == '{"query": "corn"}'
        assert request.query == {}

    def test_http_api_v2_method(self):
        request = request_from_event({"requestContext": {"http": {"method": "GET"}}})

        assert request.method == "GET"

    def test_base64_body(self):
        encoded = base64.b64encode('{"ingredient": "ají"}'.encode("utf-8")).decode("ascii")

        request = request_from_event({"httpMethod": "POST", "body": encoded, "isBase64Encoded": True})

        assert json.loads(request.body) == {"ingredient": "ají"}

    def test_path_param_from_last_segment(self):
        request = request_from_event({"httpMethod": "GET", "path": "/api/recipes/3/"}, "recipe_id")

        assert request.path_params == {"recipe_id": "3"}

    def test_explicit_path_parameters_win(self):
        request = request_from_event(
            {"httpMethod": "GET", "path": "/x/9", "pathParameters": {"recipe_id": "2"}},
            "recipe_id"
        )

        assert request.path_params == {"recipe_id": "2"}


class TestHandlers:

    def test_status(self, use_context):
        use_context(make_context(FakeInterface()))

        result = ai_status.handler({"httpMethod": "GET"}, None)

        assert result["statusCode"] == 200
        assert body_of(result)["configured"] is True
        assert result["headers"]["Access-Control-Allow-Origin"] == "*"
        assert result["headers"]["Content-Type"] == "application/json"

    def test_preflight_has_empty_body(self, use_context):
        factory = CountingFactory(FakeInterface())
        use_context(make_context(factory, gemini_api_key=None))

        result = ai_smart_search.handler({"httpMethod": "OPTIONS"}, None)

        assert result["statusCode"] == 200
        assert result["body"] == ""
        assert "Content-Type" not in result["headers"]
        assert factory.calls == 0

    def test_unconfigured_returns_503(self, use_context):
        factory = CountingFactory(FakeInterface())
        use_context(make_context(factory, gemini_api_key=None))

        result = ai_ingredient_substitution.handler(
            {"httpMethod": "POST", "body": '{"ingredient": "huevo"}'}, None
        )

        assert result["statusCode"] == 503
        assert body_of(result)["error"] == "AI service not configured"
        assert factory.calls == 0

    def test_wrong_method(self, use_context):
        use_context(make_context(FakeInterface()))

        result = ai_meal_plan.handler({"httpMethod": "GET"}, None)

        assert result["statusCode"] == 405

    def test_meal_plan_with_mock_model(self, use_context):
        use_context(make_context(MockModelInterface()))

        result = ai_meal_plan.handler({"httpMethod": "POST", "body": ""}, None)

        assert result["statusCode"] == 200
        assert body_of(result)["preferences_used"] == {}

    def test_recipe_search(self, use_context):
        use_context(make_context(FakeInterface()))

        result = recipes_search.handler(
            {"httpMethod": "GET", "queryStringParameters": {"q": "avocado"}}, None
        )

        assert [recipe["name"] for recipe in body_of(result)] == ["Completo Italiano"]

    def test_recipe_detail_from_path(self, use_context):
        use_context(make_context(FakeInterface()))

        result = recipe_detail.handler({"httpMethod": "GET", "path": "/api/recipes/3"}, None)

        assert result["statusCode"] == 200
        assert body_of(result)["name"] == "Cazuela"

    def test_recipe_detail_not_found(self, use_context):
        use_context(make_context(FakeInterface()))

        result = recipe_detail.handler({"httpMethod": "GET", "pathParameters": {"recipe_id": "42"}}, None)

        assert result["statusCode"] == 404


class TestParity:
    """The server and the functions answer the same request identically."""

    @pytest.mark.parametrize("handler, path, method, payload", [
        (ai_status.handler, "/api/ai/status", "GET", None),
        (ai_smart_search.handler, "/api/ai/smart-search", "POST", {}),
        (ai_smart_search.handler, "/api/ai/smart-search", "POST", {"query": "corn"}),
        (ai_ingredient_substitution.handler, "/api/ai/ingredient-substitution", "POST", {"ingredient": "huevo"}),
        (ai_meal_plan.handler, "/api/ai/meal-plan", "PUT", {}),
        (recipes_search.handler, "/api/recipes/search", "GET", None),
    ])
    def test_same_status_and_body(self, use_context, handler, path, method, payload):
        context = use_context(make_context(MockModelInterface()))
        body = json.dumps(payload) if payload is not None else ""

        with client_for(context) as client:
            response = client.request(method, path, content=body)
        result = handler({"httpMethod": method, "body": body, "path": path}, None)

        assert response.status_code == result["statusCode"]
        server_body = response.json()
        function_body = body_of(result)
        if isinstance(server_body, dict):
            server_body.pop("generated_at", None)
            function_body.pop("generated_at", None)
        assert server_body == function_body
