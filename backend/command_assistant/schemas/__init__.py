"""
Pydantic schemas package initialization.
"""

from command_assistant.schemas.ai import (
    AISettingsResponse,
    AISettingsUpdate,
    GenerateCommandRequest,
    GenerateCommandResponse,
    ModelsResponse,
    ProviderInfo,
    TestConnectionResponse,
)

__all__ = [
    "AISettingsResponse",
    "AISettingsUpdate",
    "GenerateCommandRequest",
    "GenerateCommandResponse",
    "ModelsResponse",
    "ProviderInfo",
    "TestConnectionResponse",
]
