"""
AISettings model: the single persisted AI assistant configuration row.
"""

from sqlalchemy import Boolean, Column, Integer, String, Text

from command_assistant.core.database import Base
from command_assistant.core.datetime_utils import now_iso


class AISettings(Base):
    """
    AI assistant configuration.

    Exactly one row is expected; it is created lazily with everything unset
    (see command_assistant.core.settings_db.AISettingsStore). api_key holds the
    encrypted credential, never the plain value.
    """

    __tablename__ = "ai_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    enabled = Column(Boolean, nullable=False, default=False)
    provider = Column(String(50), nullable=True)  # openai | openai_compatible | ollama
    model = Column(String(200), nullable=True)
    api_key = Column(Text, nullable=True)
    api_url = Column(String(500), nullable=True)
    created_at = Column(String, default=now_iso)
    updated_at = Column(String, default=now_iso, onupdate=now_iso)

    def __repr__(self) -> str:
        return f"<AISettings(id={self.id}, provider={self.provider}, enabled={self.enabled})>"
