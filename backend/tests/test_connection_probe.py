"""
Tests for the provider connection check.
"""

import httpx
import pytest

from command_assistant.services.ai_providers import AIError, ProviderSettings
from command_assistant.services.connection_probe import probe_connection


def _settings(**overrides):
    values = {"enabled": True, "provider": "openai", "model": "gpt-4o", "api_key": "sk-test"}
    values.update(overrides)
    return ProviderSettings(**values)


class TestPreconditions:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"enabled": False}, "AI is not enabled"),
            ({"provider": None}, "No AI provider configured"),
            ({"model": ""}, "No AI model configured"),
            ({"provider": "gemini"}, "Unsupported provider"),
            ({"api_key": None}, "OpenAI API key not configured"),
            (
                {"provider": "openai_compatible", "api_url": None},
                "OpenAI Compatible API URL not configured",
            ),
        ],
    )
    async def test_rejected_without_network(self, provider_http, overrides, message):
        sent = provider_http(lambda request: httpx.Response(200, json={}))
        assert await probe_connection(_settings(**overrides)) == AIError(400, message)
        assert sent == []


class TestProbe:
    @pytest.mark.asyncio
    async def test_openai_success(self, provider_http, openai_models_payload):
        sent = provider_http(lambda request: httpx.Response(200, json=openai_models_payload))

        assert await probe_connection(_settings()) is None
        assert sent[0].method == "GET"
        assert str(sent[0].url) == "https://api.openai.com/v1/models"

    @pytest.mark.asyncio
    async def test_openai_model_not_found(self, provider_http, openai_models_payload):
        provider_http(lambda request: httpx.Response(200, json=openai_models_payload))

        error = await probe_connection(_settings(model="gpt-5-turbo"))
        assert error == AIError(400, 'Configured model "gpt-5-turbo" not found in your OpenAI account')

    @pytest.mark.asyncio
    async def test_ollama_success(self, provider_http, ollama_tags_payload):
        sent = provider_http(lambda request: httpx.Response(200, json=ollama_tags_payload))

        settings = _settings(provider="ollama", model="llama3:8b", api_key=None, api_url="http://box:11434/")
        assert await probe_connection(settings) is None
        assert str(sent[0].url) == "http://box:11434/api/tags"

    @pytest.mark.asyncio
    async def test_ollama_model_not_found(self, provider_http, ollama_tags_payload):
        provider_http(lambda request: httpx.Response(200, json=ollama_tags_payload))

        error = await probe_connection(_settings(provider="ollama", model="llama3", api_key=None))
        assert error == AIError(400, 'Configured model "llama3" not found in Ollama')

    @pytest.mark.asyncio
    async def test_compatible_success_with_openai_listing(self, provider_http):
        sent = provider_http(
            lambda request: httpx.Response(200, json={"data": [{"id": "mixtral-8x7b"}]})
        )
        settings = _settings(
            provider="openai_compatible", model="mixtral-8x7b", api_url="https://llm.example.com/v1/"
        )

        assert await probe_connection(settings) is None
        assert str(sent[0].url) == "https://llm.example.com/v1/models"
        assert sent[0].headers["Authorization"] == "Bearer sk-test"

    @pytest.mark.asyncio
    async def test_compatible_success_with_named_listing(self, provider_http):
        provider_http(lambda request: httpx.Response(200, json={"models": [{"name": "phi-3"}]}))
        settings = _settings(provider="openai_compatible", model="phi-3", api_url="http://x/v1")

        assert await probe_connection(settings) is None

    @pytest.mark.asyncio
    async def test_compatible_model_not_found(self, provider_http):
        provider_http(lambda request: httpx.Response(200, json={"data": [{"id": "other"}]}))
        settings = _settings(provider="openai_compatible", model="phi-3", api_url="http://x/v1")

        error = await probe_connection(settings)
        assert error == AIError(400, 'Configured model "phi-3" not found in OpenAI Compatible API')

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({}, "OpenAI API error: 401"),
            ({"provider": "ollama", "api_key": None}, "Ollama API error: 401"),
            (
                {"provider": "openai_compatible", "api_url": "http://x/v1"},
                "OpenAI Compatible API error: 401",
            ),
        ],
    )
    async def test_http_error_status_in_message(self, provider_http, overrides, message):
        provider_http(lambda request: httpx.Response(401, json={"error": {"message": "bad key"}}))
        assert await probe_connection(_settings(**overrides)) == AIError(500, message)

    @pytest.mark.asyncio
    async def test_network_error_is_reported_not_raised(self, provider_http):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider_http(refuse)
        error = await probe_connection(_settings(provider="ollama", model="llama3:8b", api_key=None))
        assert error == AIError(500, "Connection test failed: connection refused")
