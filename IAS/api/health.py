from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from IAS.api.dependencies import get_config, get_session_service
from packages.ias_core.config import IASConfig
from packages.ias_service.session_service import InterviewSessionService

router = APIRouter()


@router.get("/health")
async def health_check(
    config: IASConfig = Depends(get_config),
    service: InterviewSessionService = Depends(get_session_service)
):
    """
    Server Liveness Probe.
    Returns status, version, live session count and current timestamp.
    """
    return {
        "status": "ok",
        "version": config.VERSION,
        "sessions": service.stats()["total"],
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
