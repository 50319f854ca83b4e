"""Contract errors – broken internal invariants."""

from __future__ import annotations

from logthis.kernel.errors.base import LogthisError


class ContractViolation(LogthisError):
    """An internal invariant or postcondition does not hold.

    Signals a defect in logthis itself. The dispatch loop never catches it.
    """

    default_code = "contract_violation"


__all__ = ["ContractViolation"]
