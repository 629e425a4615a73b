"""Evaluation kernels for barycentric rational interpolation.

Floating-point data is evaluated with NumPy: a vectorized node-coincidence
check followed by a dot product over the Cauchy terms ``w_i / (t - x_i)``.
Object arrays (:class:`fractions.Fraction` and other exact or
extended-precision types) go through plain loops that use the scalar type's
own arithmetic.

A query within a subnormal distance of a node overflows its Cauchy term; the
kernels return the limit at that node (``y_i``, or ``r'(x_i)``) instead of
``inf / inf``.

``stacklevel`` counts the frames between the kernel and the code a
:class:`RuntimeWarning` should point at (1 = the kernel's direct caller).
"""

from __future__ import annotations

import math
import warnings

import numpy as np


def _warn_degenerate(t, stacklevel: int) -> None:
    warnings.warn(
        f"Denominator of the barycentric rational vanishes at t={t!r}; "
        f"returning nan.",
        RuntimeWarning,
        stacklevel=stacklevel + 2,
    )


def _cauchy_terms(t, nodes: np.ndarray, weights: np.ndarray):
    """Return ``(t - nodes, weights / (t - nodes))`` without overflow warnings."""
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        diff = t - nodes
        terms = weights / diff
    return diff, terms


def _eval_generic(t, nodes, values, weights, stacklevel):
    numerator = 0
    denominator = 0
    for x_i, y_i, w_i in zip(nodes, values, weights):
        if t == x_i:
            return y_i
        term = w_i / (t - x_i)
        numerator += term * y_i
        denominator += term

    if denominator == 0:
        _warn_degenerate(t, stacklevel + 1)
        return math.nan
    return numerator / denominator


def barycentric_rational_eval(t, nodes: np.ndarray, values: np.ndarray,
                              weights: np.ndarray, stacklevel: int = 1):
    """Evaluate the barycentric rational interpolant at a single point.

    Parameters
    ----------
    t : scalar
        Evaluation point.
    nodes : ndarray
        Strictly increasing interpolation nodes.
    values : ndarray
        Sample values at the nodes.
    weights : ndarray
        Barycentric weights.
    stacklevel : int, optional
        Frames above this kernel that a degenerate-denominator warning
        should point at.

    Returns
    -------
    scalar
        ``values[i]`` if ``t`` equals ``nodes[i]`` exactly, otherwise the
        rational sum. ``nan`` if the denominator vanishes.
    """
    if nodes.dtype == object:
        return _eval_generic(t, nodes, values, weights, stacklevel)

    hits = np.flatnonzero(nodes == t)
    if hits.size:
        return values[hits[0]]

    _, terms = _cauchy_terms(t, nodes, weights)
    overflow = np.isinf(terms)
    if overflow.any():
        return values[np.argmax(overflow)]

    denominator = np.sum(terms)
    if denominator == 0:
        _warn_degenerate(t, stacklevel)
        return math.nan
    return np.dot(terms, values) / denominator


def _derivative_at_node(i, nodes, values, weights):
    others = np.arange(len(nodes)) != i
    return np.sum(
        weights[others] * (values[others] - values[i]) / (nodes[i] - nodes[others])
    ) / weights[i]


def _derivative_generic(t, nodes, values, weights, stacklevel):
    for i, x_i in enumerate(nodes):
        if t == x_i:
            y_i = values[i]
            acc = 0
            for j, x_j in enumerate(nodes):
                if j != i:
                    acc += weights[j] * (values[j] - y_i) / (x_i - x_j)
            return acc / weights[i]

    r = _eval_generic(t, nodes, values, weights, stacklevel + 1)
    if isinstance(r, float) and math.isnan(r):
        return r

    numerator = 0
    denominator = 0
    for x_i, y_i, w_i in zip(nodes, values, weights):
        diff = t - x_i
        term = w_i / diff
        numerator += term * (r - y_i) / diff
        denominator += term
    return numerator / denominator


def barycentric_rational_derivative(t, nodes: np.ndarray, values: np.ndarray,
                                    weights: np.ndarray, stacklevel: int = 1):
    """First derivative of the barycentric rational interpolant at *t*.

    Off the nodes this is the quotient rule applied to the two sums,

        r'(t) = sum_i w_i (r(t) - y_i) / (t - x_i)**2 / sum_i w_i / (t - x_i),

    and at a node ``x_i`` the limit

        r'(x_i) = sum_{j != i} w_j (y_j - y_i) / (x_i - x_j) / w_i.
    """
    if nodes.dtype == object:
        return _derivative_generic(t, nodes, values, weights, stacklevel)

    hits = np.flatnonzero(nodes == t)
    if hits.size:
        return _derivative_at_node(hits[0], nodes, values, weights)

    diff, terms = _cauchy_terms(t, nodes, weights)
    overflow = np.isinf(terms)
    if overflow.any():
        return _derivative_at_node(np.argmax(overflow), nodes, values, weights)

    denominator = np.sum(terms)
    if denominator == 0:
        _warn_degenerate(t, stacklevel)
        return math.nan
    r = np.dot(terms, values) / denominator
    return np.sum(terms * (r - values) / diff) / denominator


def barycentric_rational_eval_batch(points: np.ndarray, nodes: np.ndarray,
                                    values: np.ndarray, weights: np.ndarray,
                                    stacklevel: int = 1) -> np.ndarray:
    """Vectorized evaluation at many points (floating-point dtypes only).

    Parameters
    ----------
    points : ndarray
        Query points, any shape.
    nodes, values, weights : ndarray
        Interpolation data of shape (n,).
    stacklevel : int, optional
        Frames above this kernel that a degenerate-denominator warning
        should point at.

    Returns
    -------
    ndarray
        Interpolated values with the shape of *points*.
    """
    points = np.asarray(points)
    flat = np.ravel(points)

    diff = np.subtract.outer(flat, nodes)
    on_node = diff == 0

    # inf/inf and 0*inf at exact or near-exact nodes are overwritten below
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        cauchy = weights / diff
        numerator = cauchy @ values
        denominator = cauchy.sum(axis=1)
        result = numerator / denominator

    # Exact hits take priority over overflowed terms in the same row
    hit = on_node | np.isinf(cauchy)
    hit_rows = hit.any(axis=1)
    on_node_rows = on_node.any(axis=1)
    pick = np.where(on_node_rows, np.argmax(on_node, axis=1), np.argmax(hit, axis=1))
    result[hit_rows] = values[pick[hit_rows]]

    degenerate = (denominator == 0) & ~hit_rows
    if np.any(degenerate):
        warnings.warn(
            f"Denominator of the barycentric rational vanishes at "
            f"{int(degenerate.sum())} point(s); returning nan there.",
            RuntimeWarning,
            stacklevel=stacklevel + 1,
        )
        result[degenerate] = np.nan

    return result.reshape(points.shape)
