from fastapi import APIRouter

from it_support_chat.api import ai, conversations, uploads

api_router = APIRouter(prefix="/api")
api_router.include_router(conversations.router)
api_router.include_router(ai.router)
api_router.include_router(uploads.router)

__all__ = ["api_router"]
