"""Kernel contracts – precondition, postcondition and invariant checks."""
from logthis.kernel.contracts.guard import check_invariant, ensure_that, guard, require_that

__all__ = ["check_invariant", "ensure_that", "guard", "require_that"]
