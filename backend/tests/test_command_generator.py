"""
Tests for command generation requests per provider.
"""

import json

import httpx
import pytest

from command_assistant.services.ai_prompts import DEFAULT_SYSTEM_PROMPT
from command_assistant.services.ai_providers import (
    ProviderConfigurationError,
    ProviderRequestError,
    ProviderSettings,
)
from command_assistant.services.command_generator import generate_command, request_completion


def _chat_completion(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


OPENAI = ProviderSettings(enabled=True, provider="openai", model="gpt-4o-mini", api_key="sk-test")
COMPATIBLE = ProviderSettings(
    enabled=True,
    provider="openai_compatible",
    model="mixtral",
    api_key="k",
    api_url="https://llm.example.com/v1/",
)
OLLAMA = ProviderSettings(enabled=True, provider="ollama", model="llama3:8b")


class TestOpenAIShape:
    @pytest.mark.asyncio
    async def test_request_body(self, provider_http):
        sent = provider_http(lambda request: httpx.Response(200, json=_chat_completion("ls -la")))

        command = await generate_command(OPENAI, "list all files")

        assert command == "ls -la"
        assert len(sent) == 1
        request = sent[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.openai.com/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        body = json.loads(request.content)
        assert body == {
            "model": "gpt-4o-mini",
            "messages": [
                {"role": "system", "content": DEFAULT_SYSTEM_PROMPT},
                {"role": "user", "content": "list all files"},
            ],
            "max_tokens": 150,
            "temperature": 0.3,
            "stop": ["\n\n"],
        }

    @pytest.mark.asyncio
    async def test_compatible_uses_own_base_url(self, provider_http):
        sent = provider_http(lambda request: httpx.Response(200, json=_chat_completion("df -h")))

        assert await generate_command(COMPATIBLE, "disk space") == "df -h"
        assert str(sent[0].url) == "https://llm.example.com/v1/chat/completions"
        body = json.loads(sent[0].content)
        assert body["model"] == "mixtral"
        assert "options" not in body

    @pytest.mark.asyncio
    async def test_provider_error_message(self, provider_http):
        provider_http(
            lambda request: httpx.Response(
                429, json={"error": {"message": "Rate limit reached", "type": "requests"}}
            )
        )
        with pytest.raises(ProviderRequestError) as exc_info:
            await generate_command(OPENAI, "anything")
        assert exc_info.value.status_code == 429
        assert exc_info.value.message == "OpenAI API error: Rate limit reached"

    @pytest.mark.asyncio
    async def test_error_without_body_uses_status(self, provider_http):
        provider_http(lambda request: httpx.Response(503, text="Service Unavailable"))
        with pytest.raises(ProviderRequestError, match="OpenAI Compatible API error: 503"):
            await generate_command(COMPATIBLE, "anything")

    @pytest.mark.asyncio
    async def test_empty_choices(self, provider_http):
        provider_http(lambda request: httpx.Response(200, json={"choices": []}))
        assert await generate_command(OPENAI, "x") == "echo 'No command generated'"

    @pytest.mark.asyncio
    async def test_fenced_answer_is_normalized(self, provider_http):
        provider_http(
            lambda request: httpx.Response(200, json=_chat_completion("```bash\nfree -h\n```"))
        )
        assert await generate_command(OPENAI, "memory") == "free -h"


class TestOllamaShape:
    @pytest.mark.asyncio
    async def test_request_body(self, provider_http):
        sent = provider_http(
            lambda request: httpx.Response(
                200, json={"model": "llama3:8b", "message": {"role": "assistant", "content": " uptime \n"}, "done": True}
            )
        )

        assert await generate_command(OLLAMA, "how long has it been up") == "uptime"
        request = sent[0]
        assert str(request.url) == "http://localhost:11434/api/chat"
        assert "Authorization" not in request.headers
        body = json.loads(request.content)
        assert body["model"] == "llama3:8b"
        assert body["stream"] is False
        assert body["options"] == {"temperature": 0.3, "num_predict": 150, "stop": ["\n\n"]}
        assert [m["role"] for m in body["messages"]] == ["system", "user"]
        assert body["messages"][1]["content"] == "how long has it been up"

    @pytest.mark.asyncio
    async def test_error_string_from_ollama(self, provider_http):
        provider_http(lambda request: httpx.Response(404, json={"error": "model 'llama3:8b' not found"}))
        with pytest.raises(ProviderRequestError, match="Ollama API error: model 'llama3:8b' not found"):
            await generate_command(OLLAMA, "x")

    @pytest.mark.asyncio
    async def test_missing_message(self, provider_http):
        provider_http(lambda request: httpx.Response(200, json={"done": True}))
        assert await request_completion(OLLAMA, "x") is None


class TestFailures:
    @pytest.mark.asyncio
    async def test_missing_key_raises_configuration_error(self, provider_http):
        sent = provider_http(lambda request: httpx.Response(200, json=_chat_completion("ls")))
        settings = ProviderSettings(enabled=True, provider="openai", model="gpt-4o")

        with pytest.raises(ProviderConfigurationError, match="OpenAI API key not configured"):
            await generate_command(settings, "x")
        assert sent == []

    @pytest.mark.asyncio
    async def test_unsupported_provider(self, provider_http):
        provider_http(lambda request: httpx.Response(200, json={}))
        with pytest.raises(ProviderConfigurationError, match="Unsupported AI provider"):
            await generate_command(ProviderSettings(provider="nope", model="m"), "x")

    @pytest.mark.asyncio
    async def test_network_error_propagates(self, provider_http):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider_http(refuse)
        with pytest.raises(httpx.ConnectError):
            await generate_command(OLLAMA, "x")

    @pytest.mark.asyncio
    async def test_non_json_success_body(self, provider_http):
        provider_http(lambda request: httpx.Response(200, text="oops"))
        with pytest.raises(ProviderRequestError, match="invalid response"):
            await generate_command(OPENAI, "x")

    @pytest.mark.asyncio
    async def test_custom_system_prompt(self, provider_http):
        sent = provider_http(lambda request: httpx.Response(200, json=_chat_completion("pwd")))
        await generate_command(OPENAI, "where am I", system_prompt="Answer with one command.")
        body = json.loads(sent[0].content)
        assert body["messages"][0] == {"role": "system", "content": "Answer with one command."}
