"""Domain interfaces for dependency injection."""

from lifecycleduration.domain.interfaces.lifecycle_service import (
    LifecycleManagementService,
    LifecycleServiceFault,
    LifecycleServiceResponseError,
)
from lifecycleduration.domain.interfaces.registry import Registry, RegistryError

__all__ = [
    "Registry",
    "RegistryError",
    "LifecycleManagementService",
    "LifecycleServiceFault",
    "LifecycleServiceResponseError",
]
