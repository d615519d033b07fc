"""
Pydantic schemas for the AI assistant API.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class AISettingsResponse(BaseModel):
    """Stored AI settings as shown to clients. The API key is reported only as present/absent."""

    enabled: bool = False
    provider: Optional[str] = None
    model: Optional[str] = None
    api_url: Optional[str] = None
    has_api_key: bool = False
    updated_at: Optional[str] = None


class AISettingsUpdate(BaseModel):
    """
    Partial update of the AI settings.

    Only fields present in the request are applied. An empty api_key clears
    the stored key.
    """

    enabled: Optional[bool] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None
    api_url: Optional[str] = None


class ProviderInfo(BaseModel):
    """Information about a supported AI provider."""

    name: str
    display_name: str
    requires_api_key: bool
    requires_api_url: bool
    default_base_url: Optional[str] = None


class TestConnectionResponse(BaseModel):
    """Successful connection test."""

    success: bool = True
    message: str


class ModelsResponse(BaseModel):
    """Models offered by the configured provider."""

    models: List[str] = []


class GenerateCommandRequest(BaseModel):
    """Natural-language request to turn into a shell command."""

    prompt: str = Field(..., min_length=1, description="What the command should do")


class GenerateCommandResponse(BaseModel):
    """Generated shell command (single line)."""

    command: str
