from fastapi import APIRouter

from it_support_chat import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    return {"status": "ok", "version": __version__}
