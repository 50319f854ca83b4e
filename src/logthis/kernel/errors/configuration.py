"""Configuration errors – invalid construction arguments."""

from __future__ import annotations

from logthis.kernel.errors.base import LogthisError


class ConfigurationError(LogthisError):
    """Invalid Logger / Receiver / EventLevel / buffer construction arguments.

    Raised immediately at construction time; never deferred to dispatch.
    """

    default_code = "configuration_error"


__all__ = ["ConfigurationError"]
