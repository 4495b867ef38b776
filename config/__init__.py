from .config_loader import (
    DEFAULT_PORT,
    ConfigLoader,
    ServerConfig,
    get_with_default,
    load_config,
)

# NOTE: Unlike a file-backed config, nothing is loaded at import time. The
# entry point calls ConfigLoader.load_config() after .env has been applied.

__all__ = [
    "DEFAULT_PORT",
    "ConfigLoader",
    "ServerConfig",
    "get_with_default",
    "load_config",
]
