"""
AI assistant API routes (settings, connection test, models, command generation).
"""

from typing import List

import httpx
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from command_assistant.core.database import get_db
from command_assistant.core.logging import get_logger
from command_assistant.core.settings_db import AISettingsStore
from command_assistant.schemas import (
    AISettingsResponse,
    AISettingsUpdate,
    GenerateCommandRequest,
    GenerateCommandResponse,
    ModelsResponse,
    ProviderInfo,
    TestConnectionResponse,
)
from command_assistant.services import ai_assistant
from command_assistant.services.ai_providers import AIError, ProviderRequestError

logger = get_logger()

router = APIRouter(prefix="/ai", tags=["AI Assistant"])


def get_settings_store(db: Session = Depends(get_db)) -> AISettingsStore:
    return AISettingsStore(db)


def _unwrap(result):
    """Raise an AIError result as an HTTP error; pass anything else through."""
    if isinstance(result, AIError):
        raise HTTPException(status_code=result.code, detail=result.message)
    return result


@router.get("/settings", response_model=AISettingsResponse)
async def get_settings(store: AISettingsStore = Depends(get_settings_store)):
    """
    Get the AI assistant configuration (API key reported as has_api_key only).
    """
    return ai_assistant.get_settings(store)


@router.post("/settings", response_model=AISettingsResponse)
async def update_settings(
    update: AISettingsUpdate,
    store: AISettingsStore = Depends(get_settings_store),
):
    """
    Update the AI assistant configuration.
    Fields omitted from the body are left unchanged; "api_key": "" removes the key.
    """
    return ai_assistant.update_settings(store, update)


@router.get("/providers", response_model=List[ProviderInfo])
async def get_providers():
    """List supported providers and what each one needs to be configured."""
    return ai_assistant.list_providers()


@router.post("/test-connection", response_model=TestConnectionResponse)
async def test_connection(store: AISettingsStore = Depends(get_settings_store)):
    """
    Check that the configured provider is reachable and knows the configured model.
    """
    return _unwrap(await ai_assistant.test_connection(store))


@router.get("/models", response_model=ModelsResponse)
async def get_models(store: AISettingsStore = Depends(get_settings_store)):
    """
    Fetch available models from the configured provider.
    Provider or network failures give an empty list.
    """
    return _unwrap(await ai_assistant.list_models(store))


@router.post("/generate-command", response_model=GenerateCommandResponse)
async def generate_command(
    request: GenerateCommandRequest,
    store: AISettingsStore = Depends(get_settings_store),
):
    """
    Translate a natural-language request into a single shell command.
    The command is returned, never executed.
    """
    try:
        result = await ai_assistant.generate(store, request.prompt)
    except ProviderRequestError as e:
        logger.error("Command generation failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=e.message)
    except httpx.HTTPError as e:
        logger.error("Command generation request failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to reach AI provider: {e}")
    return _unwrap(result)
