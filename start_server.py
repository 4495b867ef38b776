#!/usr/bin/env python3
"""
Startup script for the automation server.

Usage:
  python start_server.py
  HOST=0.0.0.0 ENV=production python start_server.py
"""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from config.config_loader import ConfigLoader
from utils.logging import get_logger, setup_logging
from utils.production_guardrails import run_production_guardrails
from web.app import create_app

PROJECT_ROOT = Path(__file__).resolve().parent


def main() -> None:
    """Main entry point for server startup."""
    # Load environment variables from project root .env file
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)

    setup_logging(log_file=str(PROJECT_ROOT / "logs" / "server.log"))
    logger = get_logger(__name__)
    logger.info("Loading server environment", extra={"path": str(env_path)})

    config = ConfigLoader.load_config()
    run_production_guardrails(config)

    app = create_app(config)
    host = os.getenv("HOST", "127.0.0.1")
    logger.info(f"Starting server on {host}:{config.port}")
    uvicorn.run(app, host=host, port=config.port)


if __name__ == "__main__":
    main()
