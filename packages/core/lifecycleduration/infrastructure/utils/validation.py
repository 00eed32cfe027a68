"""Input validation utilities for lifecycle duration lookups."""

import structlog

from lifecycleduration.domain.models.duration_error import InvalidArgumentError

logger = structlog.get_logger(__name__)


def validate_not_empty(value: str | None, field: str) -> str:
    """Validate that a required string argument is set.

    Args:
        value: Argument value to validate.
        field: Argument name, used in the error message.

    Returns:
        The value, unchanged.

    Raises:
        InvalidArgumentError: If value is None or empty.
    """
    if not value:
        message = f"{field} is not set"
        logger.error(message, field=field)
        raise InvalidArgumentError(message, details={"field": field})
    return value


def validate_resource_request(resource_path: str | None, lifecycle_name: str | None) -> None:
    """Validate the (resource path, lifecycle name) pair of a duration request.

    Args:
        resource_path: Registry path to the resource.
        lifecycle_name: Lifecycle name associated to the resource.

    Raises:
        InvalidArgumentError: If either argument is missing or empty.
    """
    validate_not_empty(resource_path, "resource_path")
    validate_not_empty(lifecycle_name, "lifecycle_name")
