"""LifecycleManagementService interface for the remote duration operation."""

from abc import ABC, abstractmethod


class LifecycleServiceFault(Exception):
    """Raised when the service executed an operation and declared a fault."""

    def __init__(self, message: str, fault_code: str | None = None) -> None:
        """Initialize LifecycleServiceFault.

        Args:
            message: Fault reason reported by the service.
            fault_code: Fault code reported by the service, if any.
        """
        self.message = message
        self.fault_code = fault_code
        super().__init__(self.message)


class LifecycleServiceResponseError(Exception):
    """Raised when a service response cannot be read as an operation result."""

    pass


class LifecycleManagementService(ABC):
    """Abstract contract of the remote lifecycle management service.

    Implementations raise LifecycleServiceFault for service-declared faults,
    LifecycleServiceResponseError for unreadable responses and let transport
    errors (httpx.HTTPError) propagate.
    """

    @abstractmethod
    def get_lifecycle_current_state_duration(
        self,
        resource_path: str,
        lifecycle_name: str,
    ) -> int:
        """Get the time a resource has spent in its current lifecycle state.

        Args:
            resource_path: Registry path to the resource.
            lifecycle_name: Lifecycle name associated to the resource.

        Returns:
            Duration in milliseconds.

        Raises:
            LifecycleServiceFault: If the service reports a failure.
            LifecycleServiceResponseError: If the response is unreadable.
            httpx.HTTPError: If the service cannot be reached.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release transport resources."""
        pass
