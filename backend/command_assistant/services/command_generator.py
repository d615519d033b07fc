"""
Shell command generation through the configured provider.

openai and openai_compatible share the chat-completions request shape and
differ only in base URL; ollama uses its own /api/chat shape. Transport errors
are not caught here: the caller decides how to report them.
"""

from typing import Any, Callable, Dict, List, Optional

import httpx

from command_assistant.core.config import get_config
from command_assistant.core.logging import get_logger
from command_assistant.services.ai_providers import transport
from command_assistant.services.ai_providers.errors import (
    ProviderConfigurationError,
    ProviderRequestError,
)
from command_assistant.services.ai_providers.registry import (
    ProviderContract,
    ProviderKind,
    ProviderSettings,
    get_provider_contract,
    validate_provider_config,
)
from command_assistant.services.response_parser import parse_command_response

logger = get_logger()

STOP_SEQUENCES = ["\n\n"]


def build_messages(prompt: str, system_prompt: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": prompt},
    ]


def _chat_completions_body(
    model: str, messages: List[Dict[str, str]], max_tokens: int, temperature: float
) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": messages,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "stop": STOP_SEQUENCES,
    }


def _ollama_chat_body(
    model: str, messages: List[Dict[str, str]], max_tokens: int, temperature: float
) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": messages,
        "stream": False,
        "options": {
            "temperature": temperature,
            "num_predict": max_tokens,
            "stop": STOP_SEQUENCES,
        },
    }


def _chat_completions_content(data: Dict[str, Any]) -> Optional[str]:
    choices = data.get("choices") or []
    if not choices:
        return None
    return (choices[0].get("message") or {}).get("content")


def _ollama_chat_content(data: Dict[str, Any]) -> Optional[str]:
    return (data.get("message") or {}).get("content")


_CHAT_PATHS: Dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "/chat/completions",
    ProviderKind.OPENAI_COMPATIBLE: "/chat/completions",
    ProviderKind.OLLAMA: "/api/chat",
}

_BODY_BUILDERS: Dict[ProviderKind, Callable[..., Dict[str, Any]]] = {
    ProviderKind.OPENAI: _chat_completions_body,
    ProviderKind.OPENAI_COMPATIBLE: _chat_completions_body,
    ProviderKind.OLLAMA: _ollama_chat_body,
}

_CONTENT_READERS: Dict[ProviderKind, Callable[[Dict[str, Any]], Optional[str]]] = {
    ProviderKind.OPENAI: _chat_completions_content,
    ProviderKind.OPENAI_COMPATIBLE: _chat_completions_content,
    ProviderKind.OLLAMA: _ollama_chat_content,
}


def _provider_error_detail(response: httpx.Response) -> str:
    """Error message from the provider body if it has one, else the status code."""
    try:
        body = response.json()
    except ValueError:
        return str(response.status_code)
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return str(response.status_code)


def _resolve_contract(settings: ProviderSettings) -> ProviderContract:
    contract = get_provider_contract(settings)
    if contract is None:
        raise ProviderConfigurationError("Unsupported AI provider")
    error = validate_provider_config(settings, contract)
    if error:
        raise ProviderConfigurationError(error.message)
    return contract


async def request_completion(
    settings: ProviderSettings, prompt: str, system_prompt: Optional[str] = None
) -> Optional[str]:
    """
    Send the generation request and return the raw completion text.

    Raises:
        ProviderConfigurationError: provider unsupported or missing key/URL.
        ProviderRequestError: the provider answered with a non-2xx status.
        httpx.HTTPError: network or timeout failure.
    """
    contract = _resolve_contract(settings)
    assistant_config = get_config().assistant
    if system_prompt is None:
        system_prompt = assistant_config.system_prompt

    body = _BODY_BUILDERS[contract.kind](
        settings.model,
        build_messages(prompt, system_prompt),
        assistant_config.max_tokens,
        assistant_config.temperature,
    )
    url = f"{contract.base_url}{_CHAT_PATHS[contract.kind]}"
    logger.debug("Command generation request: provider=%s model=%s", contract.kind.value, settings.model)

    async with transport.create_http_client() as client:
        response = await client.post(url, headers=contract.headers, json=body)

    if not response.is_success:
        raise ProviderRequestError(
            f"{contract.display_name} API error: {_provider_error_detail(response)}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError:
        data = None
    if not isinstance(data, dict):
        raise ProviderRequestError(
            f"{contract.display_name} API returned an invalid response",
            status_code=response.status_code,
        )

    content = _CONTENT_READERS[contract.kind](data)
    return content.strip() if isinstance(content, str) else None


async def generate_command(
    settings: ProviderSettings, prompt: str, system_prompt: Optional[str] = None
) -> str:
    """Generate and normalize one shell command for a natural-language prompt."""
    raw = await request_completion(settings, prompt, system_prompt)
    return parse_command_response(raw)
