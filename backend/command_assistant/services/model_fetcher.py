"""
Fetch available models from the configured AI provider.

Listing only supports the settings UI, so it never fails hard on the network:
HTTP errors and connection problems are logged and yield an empty list.
Configuration problems are still returned as AIError.

Per provider:
  - openai: GET {base}/models, chat models only (ids containing "gpt", minus
    instruct/edit/embedding/whisper/tts/dall-e variants), sorted
  - openai_compatible: GET {base} as configured, names from "models"
  - ollama: GET {base}/api/tags, names from "models"
"""

from typing import Any, Callable, Dict, Iterable, List, Union

from command_assistant.core.logging import get_logger
from command_assistant.services.ai_providers import transport
from command_assistant.services.ai_providers.errors import AIError
from command_assistant.services.ai_providers.registry import (
    ProviderContract,
    ProviderKind,
    ProviderSettings,
    get_provider_contract,
    validate_provider_config,
)

logger = get_logger()

CHAT_MODEL_MARKER = "gpt"
NON_CHAT_MODEL_MARKERS = ("instruct", "edit", "embedding", "whisper", "tts", "dall-e")

# Path appended to the contract base URL for listing
_LIST_PATHS: Dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "/models",
    ProviderKind.OPENAI_COMPATIBLE: "",
    ProviderKind.OLLAMA: "/api/tags",
}


def model_ids(data: Any) -> List[str]:
    """Ids from an OpenAI-style listing: { data: [ { id } ] }."""
    if not isinstance(data, dict):
        return []
    return [m["id"] for m in data.get("data") or [] if isinstance(m, dict) and m.get("id")]


def model_names(data: Any) -> List[str]:
    """Names from an Ollama-style listing: { models: [ { name } ] }; falsy names dropped."""
    if not isinstance(data, dict):
        return []
    return [m["name"] for m in data.get("models") or [] if isinstance(m, dict) and m.get("name")]


def filter_chat_models(ids: Iterable[str]) -> List[str]:
    """Keep OpenAI chat model ids and sort them."""
    return sorted(
        model_id
        for model_id in ids
        if CHAT_MODEL_MARKER in model_id
        and not any(marker in model_id for marker in NON_CHAT_MODEL_MARKERS)
    )


_EXTRACTORS: Dict[ProviderKind, Callable[[Any], List[str]]] = {
    ProviderKind.OPENAI: lambda data: filter_chat_models(model_ids(data)),
    ProviderKind.OPENAI_COMPATIBLE: model_names,
    ProviderKind.OLLAMA: model_names,
}


async def _fetch(contract: ProviderContract) -> List[str]:
    url = f"{contract.base_url}{_LIST_PATHS[contract.kind]}"
    async with transport.create_http_client() as client:
        response = await client.get(url, headers=contract.headers)
    if not response.is_success:
        logger.warning(
            "Failed to fetch models from %s API: HTTP %s", contract.display_name, response.status_code
        )
        return []
    return _EXTRACTORS[contract.kind](response.json())


async def fetch_models(settings: ProviderSettings) -> Union[List[str], AIError]:
    """
    Return the model names offered by the configured provider.

    Returns:
        List of model ids/names (possibly empty), or an AIError when the
        configuration is unusable.
    """
    contract = get_provider_contract(settings)
    error = validate_provider_config(settings, contract)
    if error:
        return error

    try:
        return await _fetch(contract)
    except Exception as e:
        logger.error("Error fetching %s models: %s", contract.display_name, e, exc_info=True)
        return []
