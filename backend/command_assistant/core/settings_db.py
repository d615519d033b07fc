"""
Database-backed AI settings.

The assistant configuration is a single row in the ai_settings table. It is
created on first access with the assistant disabled and every field unset, and
only ever changed through AISettingsStore.update() (partial updates).
The API key is encrypted before it is written and decrypted by load().
"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from command_assistant.core.security import decrypt_api_key_safe, encrypt_api_key
from command_assistant.models import AISettings
from command_assistant.services.ai_providers.registry import ProviderSettings

UPDATABLE_FIELDS = ("enabled", "provider", "model", "api_key", "api_url")


def ensure_ai_settings(db: Session) -> AISettings:
    """Return the AI settings row, creating a disabled, unconfigured one if missing."""
    settings = db.query(AISettings).order_by(AISettings.id).first()
    if not settings:
        settings = AISettings(enabled=False)
        db.add(settings)
        db.commit()
        db.refresh(settings)
    return settings


class AISettingsStore:
    """Narrow read/update interface over the single ai_settings row."""

    def __init__(self, db: Session):
        self.db = db

    def find_one(self) -> Optional[AISettings]:
        return self.db.query(AISettings).order_by(AISettings.id).first()

    def get_or_create(self) -> AISettings:
        return ensure_ai_settings(self.db)

    def update(self, patch: Dict[str, Any]) -> AISettings:
        """
        Apply a partial update. Keys missing from patch are left untouched;
        an api_key of None or "" clears the stored key.
        """
        record = self.get_or_create()
        for key, value in patch.items():
            if key not in UPDATABLE_FIELDS:
                continue
            if key == "api_key":
                value = encrypt_api_key(value) if value else None
            setattr(record, key, value)
        self.db.commit()
        self.db.refresh(record)
        return record

    def load(self) -> ProviderSettings:
        """Read the row as a ProviderSettings snapshot with the key decrypted."""
        record = self.get_or_create()
        return ProviderSettings(
            enabled=bool(record.enabled),
            provider=record.provider,
            model=record.model,
            api_key=decrypt_api_key_safe(record.api_key) or None,
            api_url=record.api_url,
        )
