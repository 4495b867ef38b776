"""
Production guardrails.

Startup checks that stop the server from running in production with the
built-in placeholder secrets. Outside production the same findings are
logged as warnings and startup continues.
"""

import os
import sys
from collections.abc import Mapping

from config.config_loader import DEFAULT_PORT, ENV_VARS, ServerConfig
from utils.errors import ProductionGuardrailError
from utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTION_ENVIRONMENTS = {"production", "prod"}

# Credentials with no default; empty means the dependent feature is unusable
OPTIONAL_CREDENTIALS = (
    "privileged_api_key",
    "payment_provider_api_key",
    "payment_provider_collection_id",
)


def get_environment(environ: Mapping[str, str] | None = None) -> str:
    """Return the lower-cased ENV value, defaulting to "development"."""
    if environ is None:
        environ = os.environ
    return (environ.get("ENV") or "development").strip().lower()


def is_production(environ: Mapping[str, str] | None = None) -> bool:
    return get_environment(environ) in PRODUCTION_ENVIRONMENTS


def find_placeholder_secrets(config: ServerConfig) -> list[str]:
    """Return the env var names whose built-in placeholder default is active."""
    return [ENV_VARS[name] for name in config.defaults_in_use()]


def find_missing_credentials(config: ServerConfig) -> list[str]:
    """Return the env var names of empty credentials that have no default."""
    return [ENV_VARS[name] for name in OPTIONAL_CREDENTIALS if not getattr(config, name)]


def validate_placeholder_secrets(config: ServerConfig) -> None:
    """
    Raise if any secret is still on its placeholder default.

    Raises:
        ProductionGuardrailError: Listing every offending variable.
    """
    placeholders = find_placeholder_secrets(config)
    if placeholders:
        raise ProductionGuardrailError(
            f"{', '.join(placeholders)} still set to the development placeholder; "
            "set real values before running in production"
        )


def check_port_override(environ: Mapping[str, str] | None = None) -> str | None:
    """
    Report a PORT value that the loader does not apply.

    Returns:
        The ignored PORT value, or None when PORT is unset or empty.
    """
    if environ is None:
        environ = os.environ
    raw_port = environ.get("PORT")
    if not raw_port:
        return None
    logger.warning(
        f"PORT={raw_port!r} is ignored; server listens on {DEFAULT_PORT}",
        extra={"env_var": "PORT"},
    )
    return raw_port


def run_production_guardrails(
    config: ServerConfig, environ: Mapping[str, str] | None = None
) -> None:
    """
    Run startup checks against a loaded config.

    In production, any failed check is logged as CRITICAL and the process
    exits with status 1. Elsewhere, findings are logged as warnings only.
    """
    env = get_environment(environ)
    check_port_override(environ)

    for env_var in find_missing_credentials(config):
        logger.warning(
            f"{env_var} is not set; features that need it will fail",
            extra={"env": env, "env_var": env_var},
        )

    if env not in PRODUCTION_ENVIRONMENTS:
        for env_var in find_placeholder_secrets(config):
            logger.warning(
                f"Using placeholder {env_var} for {env}. "
                "Set a secure value before deploying to production.",
                extra={"env": env, "env_var": env_var},
            )
        logger.info(
            f"ENV={env}; skipping production guardrails", extra={"env": env}
        )
        return

    errors: list[str] = []
    try:
        validate_placeholder_secrets(config)
    except ProductionGuardrailError as e:
        errors.append(str(e))

    if errors:
        for error in errors:
            logger.critical(f"Production guardrail failed: {error}", extra={"env": env})
        sys.exit(1)

    logger.info("Production guardrails passed", extra={"env": env})
