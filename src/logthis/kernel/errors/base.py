"""Kernel errors – LogthisError, the root of every error the library raises.

Each error carries a machine-readable ``code`` slug, a ``detail`` mapping
for structured logging and, when it wraps a foreign exception, the
original ``cause``::

    try:
        sink(event)
    except Exception as exc:
        raise ReceiverError.wrap(exc, label="write_file") from exc

``str(error)`` is the human message; :meth:`LogthisError.to_dict` is what
the structlog diagnostics channel records.
"""

from __future__ import annotations

from typing import Any, TypeVar

_E = TypeVar("_E", bound="LogthisError")


class LogthisError(Exception):
    """Base class for every error raised by the logging pipeline."""

    default_code: str = "logthis_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def wrap(cls: type[_E], exc: BaseException, **kwargs: Any) -> _E:
        """Build an error whose message is *exc*'s text (or its type name)."""
        kwargs.setdefault("cause", exc)
        return cls(str(exc) or type(exc).__name__, **kwargs)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
        }
        if self.detail:
            payload["detail"] = dict(self.detail)
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["LogthisError"]
