"""
AI assistant operations: settings, connection test, model listing, command generation.

Each operation reads the single settings row through AISettingsStore and
returns either a response schema or an AIError. generate() lets provider
request failures (ProviderRequestError, httpx.HTTPError) propagate so the HTTP
layer can report them.
"""

from typing import List, Union

from command_assistant.core.logging import get_logger
from command_assistant.core.security import decrypt_api_key_safe
from command_assistant.core.settings_db import AISettingsStore
from command_assistant.models import AISettings
from command_assistant.schemas import (
    AISettingsResponse,
    AISettingsUpdate,
    GenerateCommandResponse,
    ModelsResponse,
    ProviderInfo,
    TestConnectionResponse,
)
from command_assistant.services.ai_providers import registry
from command_assistant.services.ai_providers.errors import AIError, ProviderConfigurationError
from command_assistant.services.command_generator import generate_command
from command_assistant.services.connection_probe import SUCCESS_MESSAGE, probe_connection
from command_assistant.services.model_fetcher import fetch_models

logger = get_logger()


def sanitize_settings(record: AISettings) -> AISettingsResponse:
    """Public view of the settings row; the API key is never included."""
    return AISettingsResponse(
        enabled=bool(record.enabled),
        provider=record.provider,
        model=record.model,
        api_url=record.api_url,
        has_api_key=bool(decrypt_api_key_safe(record.api_key)),
        updated_at=record.updated_at,
    )


def get_settings(store: AISettingsStore) -> AISettingsResponse:
    return sanitize_settings(store.get_or_create())


def update_settings(store: AISettingsStore, update: AISettingsUpdate) -> AISettingsResponse:
    """Apply only the fields the client sent. An empty api_key clears the stored key."""
    patch = update.model_dump(exclude_unset=True)
    if patch.get("enabled", False) is None:
        patch.pop("enabled")
    if "api_key" in patch:
        patch["api_key"] = patch["api_key"] or None

    record = store.update(patch)
    logger.info("Updated AI settings: fields=%s", sorted(patch))
    return sanitize_settings(record)


def list_providers() -> List[ProviderInfo]:
    return [ProviderInfo(**info) for info in registry.list_providers()]


async def test_connection(store: AISettingsStore) -> Union[TestConnectionResponse, AIError]:
    error = await probe_connection(store.load())
    if error:
        return error
    return TestConnectionResponse(success=True, message=SUCCESS_MESSAGE)


async def list_models(store: AISettingsStore) -> Union[ModelsResponse, AIError]:
    result = await fetch_models(store.load())
    if isinstance(result, AIError):
        return result
    return ModelsResponse(models=result)


async def generate(store: AISettingsStore, prompt: str) -> Union[GenerateCommandResponse, AIError]:
    """
    Turn a natural-language prompt into one shell command.

    Raises:
        ProviderRequestError: the provider rejected the request.
        httpx.HTTPError: the provider could not be reached.
    """
    settings = store.load()
    if not settings.enabled:
        return AIError(400, "AI is not enabled")
    if not settings.provider or not settings.model:
        return AIError(400, "AI not properly configured")
    if settings.kind is None:
        return AIError(400, "Unsupported AI provider")

    try:
        command = await generate_command(settings, prompt)
    except ProviderConfigurationError as e:
        return AIError(400, str(e))

    logger.info("Generated command with %s/%s", settings.provider, settings.model)
    return GenerateCommandResponse(command=command)
