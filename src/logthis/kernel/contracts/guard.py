"""Contract guard – named-condition assertions for builders and constructors.

Conditions are passed as an ordered mapping of description to boolean; the
first false entry is named in the raised error::

    require_that({
        "lower must be in [0, 99]": 0 <= lower <= 99,
        "lower must be <= upper": lower <= upper,
    }, where="Logger.with_limits")

Preconditions report caller mistakes (:class:`ConfigurationError`);
postconditions and invariants report defects in logthis itself
(:class:`ContractViolation`). Checks always run.
"""

from __future__ import annotations

from collections.abc import Mapping

from logthis.kernel.errors import ConfigurationError, ContractViolation, LogthisError


def guard(
    conditions: Mapping[str, bool],
    *,
    error: type[LogthisError] = ContractViolation,
    kind: str = "Invariant violated",
    where: str | None = None,
) -> None:
    """Raise *error* naming the first condition in *conditions* that is false."""
    for description, holds in conditions.items():
        if not holds:
            message = f"{kind}: {description}"
            if where:
                message = f"{message} (in {where})"
            raise error(message, detail={"condition": description, "where": where})


def require_that(conditions: Mapping[str, bool], *, where: str | None = None) -> None:
    """Check preconditions; failures indicate incorrect usage."""
    guard(conditions, error=ConfigurationError, kind="Precondition failed", where=where)


def ensure_that(conditions: Mapping[str, bool], *, where: str | None = None) -> None:
    """Check postconditions; failures indicate a bug in logthis."""
    guard(conditions, error=ContractViolation, kind="Postcondition failed", where=where)


def check_invariant(conditions: Mapping[str, bool], *, where: str | None = None) -> None:
    """Check internal state that must always hold."""
    guard(conditions, error=ContractViolation, kind="Invariant violated", where=where)


__all__ = ["check_invariant", "ensure_that", "guard", "require_that"]
