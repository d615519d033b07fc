"""
Core configuration module for the AI Command Assistant.
Loads configuration from YAML file and environment variables.
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from command_assistant.services.ai_prompts import DEFAULT_SYSTEM_PROMPT


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 8090
    debug: bool = False
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/assistant.db"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    file: str = "app.log"
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size: int = 10  # MB
    backup_count: int = 5


class AssistantConfig(BaseSettings):
    """
    Command generation settings.

    Read from AI_* environment variables (e.g. AI_SYSTEM_PROMPT); values in the
    'assistant' section of config.yaml take precedence.
    """

    model_config = SettingsConfigDict(env_prefix="AI_")

    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    max_tokens: int = 150
    temperature: float = 0.3
    request_timeout: float = 30.0  # seconds, applied by the HTTP client


class AppConfig(BaseModel):
    """Main application configuration.

    Provider, model and credentials are stored in the ai_settings table
    (see command_assistant.core.settings_db), not here.
    """

    server: ServerConfig = ServerConfig()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    assistant: AssistantConfig = Field(default_factory=AssistantConfig)

    @field_validator("assistant", mode="before")
    @classmethod
    def _assistant_from_env(cls, value):
        # Build through BaseSettings so AI_* variables fill keys the YAML omits
        if isinstance(value, dict):
            return AssistantConfig(**value)
        return value


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent.parent


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to the configuration file. If None, uses default location.

    Returns:
        AppConfig instance with loaded configuration.
    """
    if config_path is None:
        config_path = os.environ.get("COMMAND_ASSISTANT_CONFIG")
        if config_path is None:
            config_path = get_project_root() / "config.yaml"

    config_path = Path(config_path)

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
            return AppConfig(**config_data)

    return AppConfig()


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def _resolve_data_dir() -> Path:
    """
    Resolve the data directory path.

    Supports two modes:
    1. Container mode: DATA_DIR environment variable is set (e.g., /app/data)
    2. Local development: Uses project root/data

    Returns:
        Absolute path to the data directory.
    """
    data_dir_env = os.environ.get("DATA_DIR")

    if data_dir_env:
        return Path(data_dir_env).resolve()
    return (get_project_root() / "data").resolve()


def get_database_path() -> Path:
    """
    Get the absolute path to the database file.

    - Container: /app/data/assistant.db
    - Local: project_root/data/assistant.db
    """
    config = get_config()

    data_dir = _resolve_data_dir()

    # Only the filename is taken from config, e.g. "data/assistant.db" -> "assistant.db"
    db_filename = Path(config.database.path).name

    db_path = (data_dir / db_filename).resolve()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


def get_log_path() -> Path:
    """
    Get the absolute path to the log file.

    - Container: $LOGS_DIR/app.log
    - Local: project_root/logs/app.log
    """
    config = get_config()

    logs_dir_env = os.environ.get("LOGS_DIR")

    if logs_dir_env:
        log_dir = Path(logs_dir_env)
    else:
        log_dir = get_project_root() / "logs"

    log_dir.mkdir(parents=True, exist_ok=True)

    # Use only the filename from config so logs never go outside logs/
    name = Path(config.logging.file).name or "app.log"
    return log_dir / name
