"""Shared helpers for interpolant arithmetic operators."""

from __future__ import annotations

from fractions import Fraction

import numpy as np


def _is_scalar(value) -> bool:
    """Return True if *value* is a real scalar (int, float, Fraction, or numpy scalar)."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, Fraction, np.integer, np.floating))


def _check_compatible(a, b) -> None:
    """Validate that two interpolants can be combined arithmetically.

    Both operands must:
    - be the same type (checked by the operators, which return NotImplemented)
    - have the same number of nodes, identical node values, and the same order
    """
    if a.n_nodes != b.n_nodes:
        raise ValueError(
            f"Node count mismatch: {a.n_nodes} vs {b.n_nodes}"
        )

    if not np.array_equal(a.nodes, b.nodes):
        raise ValueError("Node mismatch: operands must share the same nodes")

    if a.order != b.order:
        raise ValueError(
            f"Order mismatch: {a.order} vs {b.order}"
        )
