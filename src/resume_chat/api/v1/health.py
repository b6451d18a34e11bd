from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from resume_chat.api.deps import get_db
from resume_chat.core.config import Settings, get_settings

router = APIRouter(tags=["health"])


def _collaborators(settings: Settings) -> dict[str, str]:
    return {
        "rag": "enabled" if settings.rag_enabled else "disabled",
        "layout": "enabled" if settings.layout_enabled else "disabled",
        "parser_profile": settings.parser_profile,
    }


@router.get("/health")
async def health_check(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict[str, str]:
    try:
        await db.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception:
        db_status = "disconnected"

    return {
        "status": "healthy" if db_status == "connected" else "unhealthy",
        "database": db_status,
        "version": settings.app_version,
        **_collaborators(settings),
    }


@router.get("/status")
async def liveness() -> dict[str, str]:
    return {"status": "ok"}
