"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    LogthisError                (base.py)
    ├── ConfigurationError      (configuration.py)
    ├── ContractViolation       (contract.py)
    └── DispatchError           (dispatch.py)
        ├── ReceiverError
        ├── AsyncDeliveryError
        └── BufferClosedError
"""

from logthis.kernel.errors.base import LogthisError
from logthis.kernel.errors.configuration import ConfigurationError
from logthis.kernel.errors.contract import ContractViolation
from logthis.kernel.errors.dispatch import (
    AsyncDeliveryError,
    BufferClosedError,
    DispatchError,
    ReceiverError,
)

__all__ = [
    "AsyncDeliveryError",
    "BufferClosedError",
    "ConfigurationError",
    "ContractViolation",
    "DispatchError",
    "LogthisError",
    "ReceiverError",
]
