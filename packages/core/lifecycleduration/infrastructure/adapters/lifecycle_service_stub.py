"""httpx stub for the lifecycle management service."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import httpx
import structlog

from lifecycleduration.domain.interfaces.lifecycle_service import (
    LifecycleManagementService,
    LifecycleServiceFault,
    LifecycleServiceResponseError,
)
from lifecycleduration.infrastructure.config.settings import DurationSettings

logger = structlog.get_logger(__name__)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _session_cookies(cookie: str | None, host: str) -> httpx.Cookies:
    """Seed a cookie jar from a 'name=value; name=value' session string.

    Cookies are scoped to the endpoint host the way the jar scopes cookies
    the service sets, so a renewed session cookie replaces the seeded one.
    """
    cookies = httpx.Cookies()
    if not cookie:
        return cookies
    # Dotless hosts are stored under '<host>.local' by the cookie jar
    domain = host if "." in host else f"{host}.local"
    for part in cookie.split(";"):
        name, _, value = part.strip().partition("=")
        if name:
            cookies.set(name, value, domain=domain, path="/")
    return cookies


class LifecycleManagementServiceStub(LifecycleManagementService):
    """Calls the lifecycle management service over its REST binding.

    Operations are invoked as
    ``GET {endpoint}/{operation}?{parameter}=...`` and answer with an XML
    document holding a single ``return`` element. Faults come back as HTTP 500
    with a SOAP Fault (or Axis2 Exception) body.

    The session cookie is sent on every request; cookies set by the service
    are kept by the underlying httpx.Client for later calls.

    Example:
        ```python
        stub = LifecycleManagementServiceStub(
            "https://localhost:9443/services/LifeCycleManagementService",
            cookie="JSESSIONID=...",
        )
        millis = stub.get_lifecycle_current_state_duration(path, "ServiceLifeCycle")
        stub.close()
        ```
    """

    OPERATION_CURRENT_STATE_DURATION = "getLifecycleCurrentStateDuration"
    """Operation name of the current state duration call."""

    TIMEOUT = DurationSettings.model_fields["request_timeout"].default
    """Request timeout in seconds."""

    def __init__(
        self,
        endpoint: str,
        cookie: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the stub.

        Args:
            endpoint: Service endpoint reference (backend URL + service name).
            cookie: Authenticated session cookie propagated on every call.
            timeout: Optional timeout override.
            transport: Optional httpx transport (for testing).

        Raises:
            ValueError: If endpoint is not an absolute http(s) URL.
            httpx.InvalidURL: If endpoint cannot be parsed.
        """
        url = httpx.URL(endpoint)
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"Endpoint is not an absolute http(s) URL: {endpoint}")

        self.endpoint = str(url).rstrip("/")
        self.timeout = timeout if timeout is not None else self.TIMEOUT
        self._client = httpx.Client(
            timeout=self.timeout,
            headers={"Accept": "application/xml, text/xml"},
            cookies=_session_cookies(cookie, url.host),
            transport=transport,
        )

    def get_lifecycle_current_state_duration(
        self,
        resource_path: str,
        lifecycle_name: str,
    ) -> int:
        response = self._client.get(
            f"{self.endpoint}/{self.OPERATION_CURRENT_STATE_DURATION}",
            params={
                "registryPathToResource": resource_path,
                "lifecycleName": lifecycle_name,
            },
        )
        if response.status_code == httpx.codes.INTERNAL_SERVER_ERROR:
            fault = self._parse_fault(response.text)
            if fault is not None:
                raise fault
        response.raise_for_status()

        text = self._parse_return(response.text)
        try:
            return int(text)
        except ValueError as e:
            raise LifecycleServiceResponseError(
                f"Operation {self.OPERATION_CURRENT_STATE_DURATION} returned a non-integer value: {text!r}"
            ) from e

    def _parse_return(self, body: str) -> str:
        try:
            root = ET.fromstring(body)
        except ET.ParseError as e:
            raise LifecycleServiceResponseError(f"Response is not an XML document: {e}") from e

        for element in root.iter():
            if _local_name(element.tag) == "return":
                return (element.text or "").strip()
        raise LifecycleServiceResponseError("Response holds no 'return' element")

    def _parse_fault(self, body: str) -> LifecycleServiceFault | None:
        """Read a SOAP Fault or Axis2 Exception body, None if the body is neither."""
        try:
            root = ET.fromstring(body)
        except ET.ParseError:
            return None

        for element in root.iter():
            name = _local_name(element.tag)
            if name == "Fault":
                reason = None
                code = None
                for child in element.iter():
                    child_name = _local_name(child.tag)
                    if child_name in ("faultstring", "Text") and reason is None:
                        reason = (child.text or "").strip()
                    elif child_name in ("faultcode", "Value") and code is None:
                        code = (child.text or "").strip()
                return LifecycleServiceFault(reason or "Service fault", fault_code=code)
            if name == "Exception":
                return LifecycleServiceFault((element.text or "").strip() or "Service exception")
        return None

    def close(self) -> None:
        self._client.close()
