"""Pipeline – logger orchestration, receivers and middleware."""
from logthis.pipeline.logger import (
    Logger,
    VoidLogger,
    buffer_status,
    flush,
    get_receiver,
    logger,
    logger_from_settings,
    void_logger,
)
from logthis.pipeline.middleware import Middleware, Sink, apply_middleware, middleware
from logthis.pipeline.middlewares import (
    add_context,
    add_timing,
    rate_limit,
    redact_fields,
    redact_patterns,
    sample_events,
)
from logthis.pipeline.receiver import FormattedSink, Receiver, compose, receiver

__all__ = [
    "FormattedSink",
    "Logger",
    "Middleware",
    "Receiver",
    "Sink",
    "VoidLogger",
    "add_context",
    "add_timing",
    "apply_middleware",
    "buffer_status",
    "compose",
    "flush",
    "get_receiver",
    "logger",
    "logger_from_settings",
    "middleware",
    "rate_limit",
    "receiver",
    "redact_fields",
    "redact_patterns",
    "sample_events",
    "void_logger",
]
