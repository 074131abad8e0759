"""OpenTelemetry instrumentation and structured logging utilities."""

from menu_browser.observability.config import configure_logging, setup_observability
from menu_browser.observability.decorators import traced

__all__ = ["setup_observability", "configure_logging", "traced"]
