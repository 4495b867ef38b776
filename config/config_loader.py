# config/config_loader.py

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
# Placeholder values below are only acceptable for local development.
# utils.production_guardrails refuses to start production with them active.
DEFAULT_PORT = 8080
DEFAULT_SERVICE_BASE_URL = "http://localhost:54321"
DEFAULT_PUBLIC_API_KEY = "dev-public-key-change-in-production"
DEFAULT_SIGNING_SECRET = "chatbot-automation-secret-key-change-in-production"
DEFAULT_PUBLIC_SERVER_URL = "http://localhost:8080"

# Field name -> environment variable name
ENV_VARS: dict[str, str] = {
    "port": "PORT",
    "service_base_url": "SERVICE_BASE_URL",
    "public_api_key": "SERVICE_PUBLIC_KEY",
    "privileged_api_key": "SERVICE_PRIVILEGED_KEY",
    "signing_secret": "SIGNING_SECRET",
    "payment_provider_api_key": "PAYMENT_PROVIDER_API_KEY",
    "payment_provider_collection_id": "PAYMENT_PROVIDER_COLLECTION_ID",
    "public_server_url": "PUBLIC_SERVER_URL",
}

PLACEHOLDER_DEFAULTS: dict[str, str] = {
    "public_api_key": DEFAULT_PUBLIC_API_KEY,
    "signing_secret": DEFAULT_SIGNING_SECRET,
}


@dataclass(frozen=True)
class ServerConfig:
    """
    Immutable server settings resolved from the environment at startup.

    Secret fields are marked with ``metadata={"secret": True}`` and are left
    out of ``repr()`` so the value can be logged or printed safely.
    """

    port: int = DEFAULT_PORT
    service_base_url: str = DEFAULT_SERVICE_BASE_URL
    public_api_key: str = field(
        default=DEFAULT_PUBLIC_API_KEY, repr=False, metadata={"secret": True}
    )
    privileged_api_key: str = field(default="", repr=False, metadata={"secret": True})
    signing_secret: str = field(
        default=DEFAULT_SIGNING_SECRET, repr=False, metadata={"secret": True}
    )
    payment_provider_api_key: str = field(
        default="", repr=False, metadata={"secret": True}
    )
    payment_provider_collection_id: str = ""
    public_server_url: str = DEFAULT_PUBLIC_SERVER_URL

    @classmethod
    def secret_fields(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.metadata.get("secret"))

    def defaults_in_use(self) -> list[str]:
        """Return the names of secret fields still set to a built-in placeholder."""
        return [
            name
            for name, placeholder in PLACEHOLDER_DEFAULTS.items()
            if getattr(self, name) == placeholder
        ]

    def to_safe_dict(self) -> dict[str, Any]:
        """
        Serialise the config with secret values masked.

        Secrets are reported as ``"<set>"`` or ``"<unset>"``; placeholder
        defaults are reported as ``"<default>"``.
        """
        placeholders = set(self.defaults_in_use())
        safe: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if not f.metadata.get("secret"):
                safe[f.name] = value
            elif f.name in placeholders:
                safe[f.name] = "<default>"
            else:
                safe[f.name] = "<set>" if value else "<unset>"
        return safe


def get_with_default(environ: Mapping[str, str], name: str, fallback: str) -> str:
    """Return ``environ[name]`` verbatim, or ``fallback`` when unset or empty."""
    value = environ.get(name)
    if value:
        return value
    return fallback


def load_config(environ: Mapping[str, str] | None = None) -> ServerConfig:
    """
    Build a ServerConfig from environment variables.

    Args:
        environ: Key/value lookup to read from. Defaults to ``os.environ``.

    Returns:
        ServerConfig: A new immutable config value. Never raises.

    Note:
        ``PORT`` is not applied; the port is always ``DEFAULT_PORT``.
        utils.production_guardrails.check_port_override reports when it is set.
    """
    if environ is None:
        environ = os.environ

    return ServerConfig(
        port=DEFAULT_PORT,
        service_base_url=get_with_default(
            environ, "SERVICE_BASE_URL", DEFAULT_SERVICE_BASE_URL
        ),
        public_api_key=get_with_default(
            environ, "SERVICE_PUBLIC_KEY", DEFAULT_PUBLIC_API_KEY
        ),
        privileged_api_key=get_with_default(environ, "SERVICE_PRIVILEGED_KEY", ""),
        signing_secret=get_with_default(
            environ, "SIGNING_SECRET", DEFAULT_SIGNING_SECRET
        ),
        payment_provider_api_key=get_with_default(
            environ, "PAYMENT_PROVIDER_API_KEY", ""
        ),
        payment_provider_collection_id=get_with_default(
            environ, "PAYMENT_PROVIDER_COLLECTION_ID", ""
        ),
        public_server_url=get_with_default(
            environ, "PUBLIC_SERVER_URL", DEFAULT_PUBLIC_SERVER_URL
        ),
    )


class ConfigLoader:
    """
    Process-wide holder for the ServerConfig built at startup.

    Observability:
        - Logs INFO with the redacted config on first load
        - Tracks config_status for health reporting ("ok", "degraded")
    """

    _config: ClassVar[ServerConfig | None] = None
    _config_status: ClassVar[str] = "not_loaded"  # "ok", "degraded"

    @classmethod
    def load_config(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Load the configuration from the environment if not already loaded.

        Args:
            environ: Key/value lookup passed through to ``load_config``.
                Ignored once a config has been cached.

        Returns:
            ServerConfig: The cached config.
        """
        if cls._config is None:
            config = load_config(environ)
            placeholders = config.defaults_in_use()
            cls._config_status = "degraded" if placeholders else "ok"
            cls._config = config
            logging.info(
                "Configuration loaded from environment",
                extra={
                    "config_status": cls._config_status,
                    "config": config.to_safe_dict(),
                },
            )
        return cls._config

    @classmethod
    def get_config_status(cls) -> dict[str, Any]:
        """Return config health status for observability endpoints."""
        return {
            "config_status": cls._config_status,
            "config_loaded": cls._config is not None,
            "defaults_in_use": cls._config.defaults_in_use() if cls._config else [],
        }

    @classmethod
    def reset(cls) -> None:
        """Reset the config loader state (useful for testing)."""
        cls._config = None
        cls._config_status = "not_loaded"
