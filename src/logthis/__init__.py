"""
logthis – structured event logging with composable receivers.

Import path convention::

    from logthis import logger, receiver, WARNING
    from logthis.buffering import BufferedDispatch, worker_pool
    from logthis.pipeline.middlewares import redact_fields
    from logthis.config import LogthisSettings, SettingsFactory

Quick start::

    log = logger().with_receivers(console=print)
    log(WARNING("disk almost full", free_mb=12))
"""

from logthis.buffering import BufferedDispatch, buffered, install_exit_hook, shutdown, worker_pool
from logthis.events import (
    CRITICAL,
    DEBUG,
    ERROR,
    HIGHEST,
    LOWEST,
    MESSAGE,
    NOTE,
    TRACE,
    WARNING,
    Event,
    EventLevel,
    define_level,
)
from logthis.kernel.errors import (
    AsyncDeliveryError,
    BufferClosedError,
    ConfigurationError,
    ContractViolation,
    LogthisError,
    ReceiverError,
)
from logthis.observability import ReceiverFailureWarning
from logthis.pipeline import (
    Logger,
    Receiver,
    buffer_status,
    compose,
    flush,
    get_receiver,
    logger,
    middleware,
    receiver,
    void_logger,
)

__version__ = "0.1.0"
__all__ = [
    "AsyncDeliveryError",
    "BufferClosedError",
    "BufferedDispatch",
    "CRITICAL",
    "ConfigurationError",
    "ContractViolation",
    "DEBUG",
    "ERROR",
    "Event",
    "EventLevel",
    "HIGHEST",
    "LOWEST",
    "Logger",
    "LogthisError",
    "MESSAGE",
    "NOTE",
    "Receiver",
    "ReceiverError",
    "ReceiverFailureWarning",
    "TRACE",
    "WARNING",
    "__version__",
    "buffer_status",
    "buffered",
    "compose",
    "define_level",
    "flush",
    "get_receiver",
    "install_exit_hook",
    "logger",
    "middleware",
    "receiver",
    "shutdown",
    "void_logger",
    "worker_pool",
]
