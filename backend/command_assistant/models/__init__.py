"""
Models package initialization.
"""

from command_assistant.models.ai_settings import AISettings

__all__ = [
    "AISettings",
]
