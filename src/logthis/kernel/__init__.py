"""Kernel – errors, contract checks and time primitives shared by every layer."""
