"""Custom metrics for the menu render service."""

from opentelemetry import metrics

meter = metrics.get_meter("menu-render-service")

export_success_counter = meter.create_counter(
    name="menu_export_success_total",
    description="Total number of successful menu exports by format",
    unit="1",
)

export_failure_counter = meter.create_counter(
    name="menu_export_failure_total",
    description="Total number of failed menu exports by format",
    unit="1",
)

export_duration_histogram = meter.create_histogram(
    name="menu_export_duration_seconds",
    description="Duration of menu export operations by format",
    unit="s",
)

active_preview_sessions = meter.create_up_down_counter(
    name="preview_sessions_active",
    description="Current number of open preview sessions",
    unit="1",
)


def record_export_success(export_format: str) -> None:
    export_success_counter.add(1, {"format": export_format})


def record_export_failure(export_format: str, error_type: str) -> None:
    """Record a failed export.

    Args:
        export_format: Target surface ("document", "bitmap" or "hardcopy")
        error_type: Exception class name
    """
    export_failure_counter.add(1, {"format": export_format, "error_type": error_type})


def record_export_duration(export_format: str, duration_seconds: float) -> None:
    export_duration_histogram.record(duration_seconds, {"format": export_format})


def record_preview_session_change(change: int) -> None:
    """Record preview sessions opened (positive) or closed (negative)."""
    active_preview_sessions.add(change)
