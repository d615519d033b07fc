"""
Connectivity check for the configured AI provider.

One read-only listing call confirms the provider is reachable with the stored
credentials and that the configured model exists there. Every failure comes
back as an AIError; nothing is raised to the caller.
"""

from typing import Any, Callable, Dict, List, Optional

from command_assistant.core.logging import get_logger
from command_assistant.services.ai_providers import transport
from command_assistant.services.ai_providers.errors import AIError
from command_assistant.services.ai_providers.registry import (
    ProviderKind,
    ProviderSettings,
    get_provider_contract,
    validate_provider_config,
)
from command_assistant.services.model_fetcher import model_ids, model_names

logger = get_logger()

SUCCESS_MESSAGE = "Connection test successful"

_PROBE_PATHS: Dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "/models",
    ProviderKind.OPENAI_COMPATIBLE: "/models",
    ProviderKind.OLLAMA: "/api/tags",
}

# Compatible servers answer /models in either the OpenAI or the Ollama shape
_PROBE_EXTRACTORS: Dict[ProviderKind, Callable[[Any], List[str]]] = {
    ProviderKind.OPENAI: model_ids,
    ProviderKind.OPENAI_COMPATIBLE: lambda data: model_ids(data) + model_names(data),
    ProviderKind.OLLAMA: model_names,
}

_MODEL_LOCATIONS: Dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "your OpenAI account",
    ProviderKind.OPENAI_COMPATIBLE: "OpenAI Compatible API",
    ProviderKind.OLLAMA: "Ollama",
}


async def probe_connection(settings: ProviderSettings) -> Optional[AIError]:
    """
    Test the stored provider configuration.

    Returns:
        None on success, otherwise an AIError (400 for configuration problems
        and unknown models, 500 for provider or network failures).
    """
    if not settings.enabled:
        return AIError(400, "AI is not enabled")
    if not settings.provider:
        return AIError(400, "No AI provider configured")
    if not settings.model:
        return AIError(400, "No AI model configured")

    contract = get_provider_contract(settings)
    error = validate_provider_config(settings, contract)
    if error:
        return error

    try:
        url = f"{contract.base_url}{_PROBE_PATHS[contract.kind]}"
        async with transport.create_http_client() as client:
            response = await client.get(url, headers=contract.headers)

        if not response.is_success:
            return AIError(500, f"{contract.display_name} API error: {response.status_code}")

        available = _PROBE_EXTRACTORS[contract.kind](response.json())
        if settings.model not in available:
            return AIError(
                400,
                f'Configured model "{settings.model}" not found in {_MODEL_LOCATIONS[contract.kind]}',
            )
    except Exception as e:
        logger.error("AI connection test failed: %s", e, exc_info=True)
        return AIError(500, f"Connection test failed: {e}")

    logger.info("AI connection test succeeded for %s (%s)", contract.display_name, settings.model)
    return None
