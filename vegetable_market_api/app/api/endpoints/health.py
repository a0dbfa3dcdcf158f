"""Liveness endpoint, mounted at the application root."""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends

from vegetable_market_api.app.core.config import Settings, get_settings

router = APIRouter()


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    """Report that the process is up, with its environment label."""
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return {
        "status": "OK",
        "environment": settings.environment,
        "timestamp": timestamp.replace("+00:00", "Z"),
    }
