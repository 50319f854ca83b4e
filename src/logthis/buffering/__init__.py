"""Buffering – batched, optionally asynchronous delivery to slow sinks."""
from logthis.buffering.dispatch import BufferedDispatch, BufferStats, buffered
from logthis.buffering.executor import (
    ExecutionFacility,
    Handle,
    InlineExecutor,
    shutdown_worker_pools,
    worker_pool,
)
from logthis.buffering.policy import BackpressurePolicy, FlushPolicy
from logthis.buffering.registry import BufferRegistry, default_registry, install_exit_hook, shutdown

__all__ = [
    "BackpressurePolicy",
    "BufferRegistry",
    "BufferStats",
    "BufferedDispatch",
    "ExecutionFacility",
    "FlushPolicy",
    "Handle",
    "InlineExecutor",
    "buffered",
    "default_registry",
    "install_exit_hook",
    "shutdown",
    "shutdown_worker_pools",
    "worker_pool",
]
