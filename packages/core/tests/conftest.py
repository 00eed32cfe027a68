"""Pytest configuration and shared fixtures."""
from datetime import datetime
from pathlib import Path

import pytest
import structlog
from dotenv import load_dotenv

from lifecycleduration.domain.components.history_duration_resolver import (
    HistoryDurationResolver,
)
from lifecycleduration.infrastructure.config.settings import DurationSettings
from lifecycleduration.infrastructure.registry.memory_registry import InMemoryRegistry

# Load .env file from packages/core before running tests
core_env_path = Path(__file__).parent.parent / ".env"
if core_env_path.exists():
    load_dotenv(core_env_path)

HISTORY_XML = """<?xml version="1.0" encoding="UTF-8"?>
<logs>
  <item aspect="ServiceLifeCycle" state="Testing" targetState="Production"
        timestamp="2015-06-02 10:00:00.0" user="admin"/>
  <item aspect="ServiceLifeCycle" state="Development" targetState="Testing"
        timestamp="2015-06-01 09:00:00.0" user="admin"/>
  <item aspect="ServiceLifeCycle" state="Development"
        timestamp="2015-05-30 08:00:00.0" user="admin"/>
</logs>
"""


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore default structlog configuration after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fixed_now() -> datetime:
    """Current time seen by the resolver fixture."""
    return datetime(2015, 6, 3, 10, 0, 0)


@pytest.fixture
def resource_path() -> str:
    """Registry path of a governed service."""
    return "/_system/governance/trunk/services/org/example/EchoService"


@pytest.fixture
def lifecycle_name() -> str:
    """Lifecycle attached to the governed service."""
    return "ServiceLifeCycle"


@pytest.fixture
def history_xml() -> str:
    """History of a resource moved Development -> Testing -> Production.

    Last transition at 2015-06-02 10:00:00, one day before fixed_now.
    """
    return HISTORY_XML


@pytest.fixture
def settings() -> DurationSettings:
    """Default settings."""
    return DurationSettings.from_dict({})


@pytest.fixture
def registry() -> InMemoryRegistry:
    """Empty in-memory registry."""
    return InMemoryRegistry()


@pytest.fixture
def history_path(settings: DurationSettings, resource_path: str) -> str:
    """Registry path of the history record kept for resource_path."""
    return settings.history_log_root + resource_path.replace("/", "_")


@pytest.fixture
def resolver(
    registry: InMemoryRegistry, settings: DurationSettings, fixed_now: datetime
) -> HistoryDurationResolver:
    """Resolver over the in-memory registry, with the clock fixed at fixed_now."""
    return HistoryDurationResolver(registry, settings=settings, clock=lambda: fixed_now)
