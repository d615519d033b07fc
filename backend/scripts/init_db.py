"""
Initialize database: create the ai_settings table. Run once manually before first app launch.

Usage (from backend directory):
  python -m scripts.init_db

Re-running is harmless: existing tables and the stored AI settings are kept.
"""

from command_assistant.core.config import get_database_path
from command_assistant.core.database import init_db
from command_assistant.core.logging import get_logger

logger = get_logger()


def main():
    logger.info("Initializing database at %s ...", get_database_path())
    init_db()
    logger.info(
        "Database initialization complete. Run the application with: python -m uvicorn main:app --host 0.0.0.0 --port 8090"
    )


if __name__ == "__main__":
    main()
