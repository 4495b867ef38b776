import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for CI environments where
# Python might not automatically include it.
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.config_loader import ConfigLoader


@pytest.fixture(autouse=True)
def reset_config_loader():
    """Ensure ConfigLoader state does not leak between tests."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the server reads from the real environment."""
    for name in (
        "PORT",
        "SERVICE_BASE_URL",
        "SERVICE_PUBLIC_KEY",
        "SERVICE_PRIVILEGED_KEY",
        "SIGNING_SECRET",
        "PAYMENT_PROVIDER_API_KEY",
        "PAYMENT_PROVIDER_COLLECTION_ID",
        "PUBLIC_SERVER_URL",
        "ENV",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
