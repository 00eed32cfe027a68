"""Configuration settings using pydantic-settings."""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DurationSettings(BaseSettings):
    """Configuration settings for lifecycle duration lookups.

    Settings can be loaded from environment variables or passed as a dictionary.
    Environment variables should be prefixed with 'LIFECYCLEDURATION_'
    (e.g., LIFECYCLEDURATION_SERVICE_NAME=LifeCycleManagementService).

    The history layout values (log root, element path, attribute names and
    timestamp format) are shared with the subsystem that writes lifecycle
    history and must match it.

    Example:
        ```python
        # From environment variables
        settings = DurationSettings()

        # From dictionary
        settings = DurationSettings(timestamp_format="%Y-%m-%d %H:%M:%S")
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="LIFECYCLEDURATION_",
        case_sensitive=False,
        extra="ignore",
    )

    # History record layout
    history_log_root: str = Field(
        default="/_system/governance/repository/components/org.wso2.carbon.governance/lifecycles/history/",
        description="Registry collection holding lifecycle history records",
        min_length=1,
    )
    history_item_path: str = Field(
        default=".//item",
        description="ElementTree path selecting history entries in a history document",
        min_length=1,
    )
    lifecycle_name_attribute: str = Field(
        default="aspect",
        description="History entry attribute holding the lifecycle name",
        min_length=1,
    )
    target_state_attribute: str = Field(
        default="targetState",
        description="History entry attribute holding the state reached by a transition",
        min_length=1,
    )
    timestamp_attribute: str = Field(
        default="timestamp",
        description="History entry attribute holding the entry time",
        min_length=1,
    )
    timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S.%f",
        description="strptime format of history entry timestamps",
        min_length=1,
    )

    # Lifecycle management service configuration
    service_name: str = Field(
        default="LifeCycleManagementService",
        description="Service name appended to the backend server URL",
        min_length=1,
    )
    request_timeout: float = Field(
        default=30.0,
        description="Transport timeout in seconds for service calls",
        gt=0,
    )

    # Observability configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_format: bool = Field(
        default=True,
        description="Render logs as JSON (False for human-readable console output)",
    )

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "DurationSettings":
        """Create settings from a dictionary.

        Args:
            config: Dictionary with configuration values.

        Returns:
            DurationSettings instance.
        """
        return cls(**config)
