from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from chat_relay.api.deps import app_settings
from chat_relay.config import Settings
from ...log import log

router = APIRouter()


@router.get("/health")
async def health_check(settings: Settings = Depends(app_settings)):
    """
    Simple liveness probe. Never calls the upstream, so it stays green
    even when the API key is missing.
    """
    log().info("🔍 Health check")
    return {
        "status": "OK",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "response_mode": settings.CHAT_RESPONSE_MODE,
        "api_key_configured": settings.api_key_configured,
    }


@router.get("/test")
async def test_endpoint():
    return {"message": "Server is working!"}
