"""Observability – diagnostics logging and the failure side channel."""
from logthis.observability.diagnostics import (
    FlushFailureWarning,
    ReceiverFailureWarning,
    report_delivery_failure,
    report_flush_failure,
    report_receiver_failure,
)
from logthis.observability.logging import DiagnosticsConfigurator, SensitiveFieldsFilter, get_logger

__all__ = [
    "DiagnosticsConfigurator",
    "FlushFailureWarning",
    "ReceiverFailureWarning",
    "SensitiveFieldsFilter",
    "get_logger",
    "report_delivery_failure",
    "report_flush_failure",
    "report_receiver_failure",
]
