"""OpenTelemetry instrumentation and structured logging."""

from menu_render_service.observability.config import configure_logging, setup_observability
from menu_render_service.observability.decorators import traced

__all__ = ["setup_observability", "configure_logging", "traced"]
