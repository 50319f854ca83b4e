"""Observability – structlog diagnostics for the library itself."""
from logthis.observability.logging.factory import DiagnosticsConfigurator
from logthis.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from logthis.observability.logging.processors import ComponentProcessor, get_logger

__all__ = [
    "ComponentProcessor",
    "DEFAULT_SENSITIVE_FIELDS",
    "DiagnosticsConfigurator",
    "SensitiveFieldsFilter",
    "get_logger",
]
