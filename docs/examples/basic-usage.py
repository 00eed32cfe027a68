"""
Basic Lifecycle Duration Usage Example

This example demonstrates the two ways of getting how long a resource has
been in its current lifecycle state:
- Asking the lifecycle management service (formatted string)
- Resolving it locally from exported lifecycle history (milliseconds)
- Basic error handling

Prerequisites:
    Install from source:
    pip install -e .

Run with: python basic-usage.py [history-export-dir]

Environment:
    LCM_BACKEND_URL     Backend services URL, e.g. https://localhost:9443/services/
    LCM_SESSION_COOKIE  Session cookie of an authenticated user
"""

import os
import sys

from lifecycleduration.domain.components.duration_formatter import format_duration
from lifecycleduration.domain.components.history_duration_resolver import (
    HistoryDurationResolver,
)
from lifecycleduration.domain.interfaces.registry import RegistryError
from lifecycleduration.domain.models.duration_error import DurationError
from lifecycleduration.infrastructure.clients.lifecycle_management_client import (
    LifeCycleManagementServiceClient,
)
from lifecycleduration.infrastructure.config.settings import DurationSettings
from lifecycleduration.infrastructure.observability.logger import configure_logging
from lifecycleduration.infrastructure.registry.file_registry import FileSystemRegistry

RESOURCE_PATH = "/_system/governance/trunk/services/org/example/EchoService"
LIFECYCLE_NAME = "ServiceLifeCycle"


def remote_duration(settings: DurationSettings) -> None:
    """Ask the lifecycle management service."""
    backend_url = os.getenv("LCM_BACKEND_URL", "https://localhost:9443/services/")
    cookie = os.getenv("LCM_SESSION_COOKIE")

    try:
        with LifeCycleManagementServiceClient(cookie, backend_url, settings=settings) as client:
            duration = client.get_lifecycle_current_state_duration(RESOURCE_PATH, LIFECYCLE_NAME)
            print(f"Remote: {LIFECYCLE_NAME} state entered {duration} ago")
    except DurationError as e:
        print(f"Remote lookup failed ({e.category.value}): {e}")


def local_duration(settings: DurationSettings, export_dir: str) -> None:
    """Resolve from an exported copy of the registry."""
    try:
        resolver = HistoryDurationResolver(FileSystemRegistry(export_dir), settings=settings)
        millis = resolver.resolve_current_state_duration(RESOURCE_PATH, LIFECYCLE_NAME)
        print(f"Local:  {LIFECYCLE_NAME} state entered {format_duration(millis)} ago")
    except RegistryError as e:
        print(f"Local lookup failed: {e}")
    except DurationError as e:
        print(f"Local lookup failed ({e.category.value}): {e}")


def main() -> None:
    """Run both lookups."""
    settings = DurationSettings()
    configure_logging(settings.log_level, json_format=settings.json_format)

    remote_duration(settings)
    if len(sys.argv) > 1:
        local_duration(settings, sys.argv[1])


if __name__ == "__main__":
    main()
