from datetime import datetime, timezone

from fastapi import APIRouter

from linguastore.core.config import get_settings

router = APIRouter()


@router.get("/healthz")
async def healthcheck() -> dict[str, str]:
    """Liveness probe; does not touch the database."""
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.app_env,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
