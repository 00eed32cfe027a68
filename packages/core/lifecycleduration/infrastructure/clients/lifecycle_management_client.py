"""Client for the lifecycle management service."""

from __future__ import annotations

from types import TracebackType

import httpx
import structlog

from lifecycleduration.domain.components.duration_formatter import DurationFormatter
from lifecycleduration.domain.interfaces.lifecycle_service import (
    LifecycleManagementService,
    LifecycleServiceFault,
    LifecycleServiceResponseError,
)
from lifecycleduration.domain.models.duration_error import (
    ConnectionSetupError,
    RemoteOperationError,
    ServiceUnavailableError,
)
from lifecycleduration.infrastructure.adapters.lifecycle_service_stub import (
    LifecycleManagementServiceStub,
)
from lifecycleduration.infrastructure.config.settings import DurationSettings
from lifecycleduration.infrastructure.utils.validation import validate_resource_request

logger = structlog.get_logger(__name__)


class LifeCycleManagementServiceClient:
    """Calls the lifecycle management service and formats its results.

    Each client owns its own service stub, bound to one authenticated
    session. Create one client per session; close it when done.

    Example:
        ```python
        with LifeCycleManagementServiceClient(cookie, "https://localhost:9443/services/") as client:
            client.get_lifecycle_current_state_duration(path, "ServiceLifeCycle")  # "02h:02m:09s"
        ```
    """

    def __init__(
        self,
        cookie: str | None,
        backend_server_url: str,
        settings: DurationSettings | None = None,
        transport: httpx.BaseTransport | None = None,
        formatter: DurationFormatter | None = None,
    ) -> None:
        """Initialize lifecycle management service client.

        Args:
            cookie: Session cookie of the authenticated user.
            backend_server_url: Backend services URL (service name is appended).
            settings: Service settings. Defaults to DurationSettings().
            transport: Optional httpx transport (for testing).
            formatter: Optional DurationFormatter override.

        Raises:
            ConnectionSetupError: If the service stub cannot be initialized.
        """
        self._settings = settings or DurationSettings()
        self._formatter = formatter or DurationFormatter()
        self.service_name = self._settings.service_name
        self.end_point_reference = (backend_server_url or "") + self.service_name
        try:
            self._stub: LifecycleManagementService = LifecycleManagementServiceStub(
                self.end_point_reference,
                cookie=cookie,
                timeout=self._settings.request_timeout,
                transport=transport,
            )
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            message = f"Failed to initiate lifecycle management service client. {e}"
            logger.error(message, endpoint=self.end_point_reference)
            raise ConnectionSetupError(
                message, details={"endpoint": self.end_point_reference}
            ) from e

    def get_lifecycle_current_state_duration(self, resource_path: str, lifecycle_name: str) -> str:
        """Get the current lifecycle state duration of a resource.

        Args:
            resource_path: Registry path to the resource.
            lifecycle_name: Lifecycle name associated to the resource. With
                multiple lifecycles, call once per lifecycle.

        Returns:
            Duration formatted as 'd:hh:mm:ss' (see DurationFormatter).

        Raises:
            InvalidArgumentError: If resource_path or lifecycle_name is empty.
            ServiceUnavailableError: If the service cannot be reached.
            RemoteOperationError: If the service reports a failure.
        """
        validate_resource_request(resource_path, lifecycle_name)
        context = {
            "service": self.service_name,
            "resource_path": resource_path,
            "lifecycle_name": lifecycle_name,
        }
        try:
            duration = self._stub.get_lifecycle_current_state_duration(resource_path, lifecycle_name)
        except LifecycleServiceFault as e:
            message = (
                f"Error in service: {self.service_name} while getting lifecycle current state "
                f"duration: {e.message}"
            )
            logger.error(message, fault_code=e.fault_code, **context)
            raise RemoteOperationError(
                message, details={**context, "fault_code": e.fault_code}
            ) from e
        except (httpx.HTTPError, LifecycleServiceResponseError) as e:
            message = (
                f"{self.service_name}'s operation, getLifecycleCurrentStateDuration is unavailable: {e}"
            )
            logger.error(message, **context)
            raise ServiceUnavailableError(message, details=context) from e

        return self._formatter.format(duration)

    def close(self) -> None:
        """Close the underlying service transport."""
        self._stub.close()

    def __enter__(self) -> LifeCycleManagementServiceClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
