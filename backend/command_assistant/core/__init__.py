"""
Core module initialization.
"""

from command_assistant.core.config import get_config, load_config
from command_assistant.core.database import get_db, init_db, drop_db, Base
from command_assistant.core.logging import get_logger, setup_logging
from command_assistant.core.security import encrypt_api_key, decrypt_api_key

__all__ = [
    "get_config",
    "load_config",
    "get_db",
    "init_db",
    "drop_db",
    "Base",
    "get_logger",
    "setup_logging",
    "encrypt_api_key",
    "decrypt_api_key",
]
