"""
API routes package initialization.
"""

from fastapi import APIRouter

from command_assistant.api.ai import router as ai_router

# Create main API router with v1 versioning
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(ai_router)

__all__ = ["api_router"]
