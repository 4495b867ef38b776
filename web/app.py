"""
FastAPI application for the automation server.

Only the health routes live here; the application built on top of this
config mounts its own routers on the returned app.
"""

from fastapi import FastAPI

from config.config_loader import ConfigLoader, ServerConfig
from utils.logging import get_logger
from web.routes import health

logger = get_logger(__name__)


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        config: Config to serve. Defaults to ConfigLoader.load_config().
    """
    if config is None:
        config = ConfigLoader.load_config()

    app = FastAPI(
        title="Chatbot Automation Server",
        version="1.0.0",
    )
    app.state.config = config

    app.include_router(health.router)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "ok", "service": health.SERVICE_NAME}

    logger.info(
        "Application created",
        extra={"config": config.to_safe_dict()},
    )
    return app
