"""Shared test fixtures and configuration for pytest."""

import os
import pytest

# Keep the server's log output quiet and deterministic under test
os.environ.setdefault("LOG_LEVEL", "WARNING")

from config.settings import Settings
from mcp_server.counter_server import build_identity, create_server
from mcp_server.counter_store import CounterStore
from mcp_server.dispatcher import ToolDispatcher

SETTINGS_ENV_VARS = ("SERVER_NAME", "SERVER_VERSION", "LOG_LEVEL", "COUNTER_BITS", "OVERFLOW_POLICY")


# ==================== Environment Fixtures ====================


@pytest.fixture
def temp_env(monkeypatch):
    """Fixture for temporarily modifying environment variables."""
    def set_env(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key, value)

    return set_env


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every settings variable so defaults apply."""
    for key in SETTINGS_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


# ==================== Counter Fixtures ====================


@pytest.fixture
def store() -> CounterStore:
    """Fresh 32-bit wrapping counter at zero."""
    return CounterStore()


@pytest.fixture
def make_store():
    """Factory fixture for counters with a given width, policy and starting value."""
    def _make(bits: int = 32, overflow_policy: str = "wrap", value: int = 0) -> CounterStore:
        counter = CounterStore(bits=bits, overflow_policy=overflow_policy)
        counter._value = value
        return counter

    return _make


@pytest.fixture
def dispatcher(store) -> ToolDispatcher:
    """Dispatcher bound to the shared ``store`` fixture."""
    return ToolDispatcher(store)


@pytest.fixture
def app_settings(clean_env) -> Settings:
    """Settings built from defaults only."""
    return Settings(_env_file=None, server_version="9.9.9-test")


@pytest.fixture
def counter_server(dispatcher, app_settings):
    """Low-level MCP server wired to the ``dispatcher`` fixture."""
    return create_server(dispatcher, build_identity(app_settings))
