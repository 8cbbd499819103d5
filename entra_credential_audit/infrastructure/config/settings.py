"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass, field
from functools import cached_property

from ...application.outcome import FailurePolicy
from ...application.use_cases import AuditOptions
from ...domain.value_objects import WarningWindow
from ..adapters.entra_id.graph_client import GraphClientConfig
from ..adapters.notifications.graph_mail import GraphMailConfig


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes")


def _env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key, str(default))
    try:
        return int(value)
    except ValueError:
        msg = f"{key} must be an integer, got {value!r}"
        raise ValueError(msg) from None


def _env_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    value = os.environ.get(key, str(default))
    try:
        return float(value)
    except ValueError:
        msg = f"{key} must be a number, got {value!r}"
        raise ValueError(msg) from None


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class Settings:
    """Application settings container."""

    # Azure/Entra ID
    azure_tenant_id: str = field(default_factory=lambda: _env_str("AZURE_TENANT_ID"))
    azure_client_id: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_ID"))
    azure_client_secret: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_SECRET"))
    graph_timeout: float = field(default_factory=lambda: _env_float("GRAPH_TIMEOUT", 30.0))

    # Audit
    warning_days: int = field(default_factory=lambda: _env_int("WARNING_DAYS", 30))
    output_path: str = field(default_factory=lambda: _env_str("OUTPUT_PATH"))
    local_execution: bool = field(default_factory=lambda: _env_bool("LOCAL_EXECUTION"))
    scan_failure_policy: str = field(default_factory=lambda: _env_str("SCAN_FAILURE_POLICY", "abort"))
    dispatch_failure_policy: str = field(
        default_factory=lambda: _env_str("DISPATCH_FAILURE_POLICY", "abort")
    )

    # Mail
    mail_sender: str = field(default_factory=lambda: _env_str("MAIL_SENDER"))
    admin_email: str = field(default_factory=lambda: _env_str("ADMIN_EMAIL"))

    # Run configuration
    run_mode: str = field(default_factory=lambda: _env_str("RUN_MODE", "once"))
    cron_schedule: str = field(default_factory=lambda: _env_str("CRON_SCHEDULE", "0 8 * * *"))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))

    # API settings
    api_enabled: bool = field(default_factory=lambda: _env_bool("API_ENABLED"))
    api_host: str = field(default_factory=lambda: _env_str("API_HOST", "0.0.0.0"))  # noqa: S104
    api_port: int = field(default_factory=lambda: _env_int("API_PORT", 8080))

    def missing_fields(self) -> list[str]:
        """Names of required settings that are empty for the selected mode."""
        required = [
            ("AZURE_TENANT_ID", self.azure_tenant_id),
            ("AZURE_CLIENT_ID", self.azure_client_id),
            ("AZURE_CLIENT_SECRET", self.azure_client_secret),
        ]
        if self.local_execution:
            required.append(("OUTPUT_PATH", self.output_path))
        else:
            required.extend([
                ("MAIL_SENDER", self.mail_sender),
                ("ADMIN_EMAIL", self.admin_email),
            ])
        return [name for name, value in required if not value]

    def validate(self) -> None:
        """Validate required settings, reporting every problem at once."""
        problems: list[str] = []

        missing = self.missing_fields()
        if missing:
            problems.append(f"Missing required environment variables: {', '.join(missing)}")

        if self.warning_days <= 0:
            problems.append(f"WARNING_DAYS must be a positive number of days, got {self.warning_days}")

        for key, value in (
            ("SCAN_FAILURE_POLICY", self.scan_failure_policy),
            ("DISPATCH_FAILURE_POLICY", self.dispatch_failure_policy),
        ):
            if value.lower() not in {p.value for p in FailurePolicy}:
                problems.append(f"{key} must be 'abort' or 'isolate', got {value!r}")

        if problems:
            raise ValueError("; ".join(problems))

    @cached_property
    def graph_config(self) -> GraphClientConfig:
        """Get Graph API client configuration."""
        return GraphClientConfig(
            tenant_id=self.azure_tenant_id,
            client_id=self.azure_client_id,
            client_secret=self.azure_client_secret,
            timeout=self.graph_timeout,
        )

    @cached_property
    def mail_config(self) -> GraphMailConfig:
        """Get Graph mail configuration."""
        return GraphMailConfig(from_address=self.mail_sender)

    @cached_property
    def warning_window(self) -> WarningWindow:
        """Get the warning window."""
        return WarningWindow(days=self.warning_days)

    @cached_property
    def audit_options(self) -> AuditOptions:
        """Get the options of the audit use case."""
        return AuditOptions(
            warning_window=self.warning_window,
            admin_email=self.admin_email,
            output_path=self.output_path or None,
            local_execution=self.local_execution,
            scan_failure_policy=FailurePolicy(self.scan_failure_policy.lower()),
            dispatch_failure_policy=FailurePolicy(self.dispatch_failure_policy.lower()),
        )


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    settings = Settings()
    settings.validate()
    return settings
