"""
Health routes.

Expose whether configuration has loaded and which settings are still on
development defaults. Secret values are never returned.
"""

from fastapi import APIRouter, Request

from config.config_loader import ServerConfig

router = APIRouter(prefix="/api/health", tags=["health"])

SERVICE_NAME = "chatbot-automation-server"


def _config_status(config: ServerConfig) -> dict:
    placeholders = config.defaults_in_use()
    return {
        "config_status": "degraded" if placeholders else "ok",
        "config_loaded": True,
        "defaults_in_use": placeholders,
    }


@router.get("/")
async def health_check(request: Request):
    """
    Simple health check endpoint (public).

    Returns basic service status and the status of the config the app serves.
    """
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "config": _config_status(request.app.state.config),
    }


@router.get("/config")
async def config_summary(request: Request):
    """Return the active configuration with secrets masked."""
    return {"success": True, "data": request.app.state.config.to_safe_dict()}
