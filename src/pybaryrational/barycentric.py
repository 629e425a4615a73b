"""One-dimensional barycentric rational interpolation (Floater-Hormann).

The interpolant blends the ``n - d`` local polynomial interpolants of degree
``d`` through consecutive windows of ``d + 1`` nodes. In barycentric form

    r(t) = sum_i w_i y_i / (t - x_i)  /  sum_i w_i / (t - x_i),

where the weights depend only on the nodes and the order ``d``. They are
computed once at construction, so every evaluation costs O(n).

References
----------
- Floater & Hormann (2007), "Barycentric rational interpolation with no poles
  and high rates of approximation", Numerische Mathematik 107(2):315-331
- Berrut & Trefethen (2004), "Barycentric Lagrange Interpolation",
  SIAM Review 46(3):501-517
"""

from __future__ import annotations

import operator
import os
import pickle
import time
import warnings
from typing import Callable, Sequence

import numpy as np

from pybaryrational._kernels import (
    barycentric_rational_derivative,
    barycentric_rational_eval,
    barycentric_rational_eval_batch,
)

#: Order used when none is given; clamped to ``n - 1`` for fewer than 4 nodes.
DEFAULT_ORDER = 3


def _as_1d_array(data, name: str) -> np.ndarray:
    """Copy *data* into a 1-D array, promoting integers to float64."""
    arr = np.array(data)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {arr.shape}")
    if arr.dtype.kind in "biu":
        arr = arr.astype(float)
    elif arr.dtype.kind not in "fcO":
        raise TypeError(f"{name} must be numeric, got dtype {arr.dtype}")
    return arr


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


def validate_nodes(nodes: np.ndarray) -> None:
    """Check that *nodes* holds at least two finite, strictly increasing values.

    Raises
    ------
    TypeError
        If the nodes are complex.
    ValueError
        If there are fewer than two nodes, a node is NaN or Inf, or the
        sequence is not strictly increasing.
    """
    if np.iscomplexobj(nodes):
        raise TypeError("nodes must be real, got complex values")
    n = len(nodes)
    if n < 2:
        raise ValueError(f"At least 2 nodes are required, got {n}")
    if nodes.dtype.kind == "f" and not np.isfinite(nodes).all():
        raise ValueError("nodes contain NaN or Inf")
    for i in range(n - 1):
        if not nodes[i] < nodes[i + 1]:
            raise ValueError(
                f"nodes must be strictly increasing: nodes[{i}]={nodes[i]!r} "
                f"is not less than nodes[{i + 1}]={nodes[i + 1]!r}"
            )


def _check_order(order, n: int) -> int:
    if isinstance(order, (bool, np.bool_)):
        raise TypeError("order must be an integer, got bool")
    try:
        d = operator.index(order)
    except TypeError:
        raise TypeError(
            f"order must be an integer, got {type(order).__name__}"
        ) from None
    if not 0 <= d <= n - 1:
        raise ValueError(
            f"order must satisfy 0 <= order <= n - 1 = {n - 1}, got {d}"
        )
    return d


def _resolve_order(order, n: int) -> int:
    if order is None:
        return min(DEFAULT_ORDER, n - 1)
    return _check_order(order, n)


def _floater_hormann_weights(nodes: np.ndarray, d: int) -> np.ndarray:
    n = len(nodes)
    # Unit of the scalar field, so Fraction nodes give exact weights
    one = (nodes[1] - nodes[0]) / (nodes[1] - nodes[0])
    weights = []
    for i in range(n):
        w_i = one - one
        for k in range(max(0, i - d), min(n - 1 - d, i) + 1):
            product = one
            for j in range(k, k + d + 1):
                if j != i:
                    product *= nodes[i] - nodes[j]
            if k % 2 == 0:
                w_i += one / product
            else:
                w_i -= one / product
        weights.append(w_i)
    return np.array(weights, dtype=nodes.dtype)


def compute_floater_hormann_weights(nodes: Sequence, order: int) -> np.ndarray:
    """Compute Floater-Hormann barycentric weights.

    Parameters
    ----------
    nodes : array_like
        Strictly increasing interpolation nodes of shape (n,).
    order : int
        Approximation order ``d`` with ``0 <= d <= n - 1``.

    Returns
    -------
    ndarray
        Weights ``w_i = sum_{k in K(i)} (-1)^k prod_{j=k, j!=i}^{k+d}
        1 / (x_i - x_j)`` with ``K(i) = {max(0, i-d), ..., min(n-1-d, i)}``.
        Every term of the sum has sign ``(-1)^(i-d)``, so ``d = 0`` gives
        exactly ``+1, -1, +1, ...``. The dtype follows the nodes.

    Raises
    ------
    ValueError
        If the nodes are not strictly increasing, fewer than two, or the
        order is out of range.
    """
    nodes = _as_1d_array(nodes, "nodes")
    validate_nodes(nodes)
    d = _check_order(order, len(nodes))
    return _floater_hormann_weights(nodes, d)


class BarycentricRational:
    """Floater-Hormann barycentric rational interpolant of 1-D data.

    Interpolates ``values[i]`` at ``nodes[i]`` exactly and has no poles on
    the real line inside the node span. The weights are computed once at
    construction; afterwards the object is read-only and can be evaluated
    from several threads at once.

    Parameters
    ----------
    nodes : array_like
        Strictly increasing sample locations, at least two.
    values : array_like
        Sample values, one per node.
    order : int, optional
        Approximation order ``d``, ``0 <= d <= len(nodes) - 1``. Higher
        orders give smoother interpolants. Defaults to :data:`DEFAULT_ORDER`
        (3), clamped to ``len(nodes) - 1`` for short inputs.

    Raises
    ------
    ValueError
        If the lengths differ, the nodes are invalid, or the order is out of
        range. Nothing is computed before validation succeeds.

    Examples
    --------
    >>> r = BarycentricRational([0.0, 1.0, 2.0, 3.0], [1.0, 3.0, 2.0, 5.0])
    >>> float(r(1.0))
    3.0
    >>> r.order
    3
    """

    def __init__(
        self,
        nodes: Sequence,
        values: Sequence,
        order: int | None = None,
    ):
        nodes = _as_1d_array(nodes, "nodes")
        values = _as_1d_array(values, "values")
        if len(nodes) != len(values):
            raise ValueError(
                f"len(nodes)={len(nodes)} does not match len(values)={len(values)}"
            )
        validate_nodes(nodes)
        self._order = _resolve_order(order, len(nodes))

        start = time.time()
        weights = _floater_hormann_weights(nodes, self._order)
        self.build_time = time.time() - start

        self._nodes = _freeze(nodes)
        self._values = _freeze(values)
        self._weights = _freeze(weights)

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_function(
        cls,
        function: Callable,
        nodes: Sequence,
        order: int | None = None,
        verbose: bool = False,
    ) -> "BarycentricRational":
        """Sample *function* at *nodes* and interpolate the samples.

        Parameters
        ----------
        function : callable
            Function of one variable, ``f(x) -> scalar``.
        nodes : array_like
            Strictly increasing sample locations.
        order : int, optional
            Approximation order (see :class:`BarycentricRational`).
        verbose : bool, optional
            If True, print build progress. Default is False.
        """
        nodes = _as_1d_array(nodes, "nodes")
        if verbose:
            print(f"Building barycentric rational interpolant "
                  f"({len(nodes):,} evaluations)...")
        values = [function(x) for x in nodes]
        obj = cls(nodes, values, order)
        if verbose:
            print(f"  Built in {obj.build_time:.3f}s "
                  f"(order {obj.order}, {obj.n_nodes} weights)")
        return obj

    def with_values(self, values: Sequence) -> "BarycentricRational":
        """Interpolate new *values* on the same nodes, reusing the weights.

        Raises
        ------
        ValueError
            If ``len(values)`` differs from the node count.
        """
        values = _as_1d_array(values, "values")
        if len(values) != self.n_nodes:
            raise ValueError(
                f"len(values)={len(values)} does not match n_nodes={self.n_nodes}"
            )
        return BarycentricRational._from_parts(self, values)

    @classmethod
    def _from_parts(cls, source, values):
        """Create a new instance sharing nodes and weights with *source*.

        Internal factory for :meth:`with_values` and the arithmetic operators.
        """
        obj = object.__new__(cls)
        obj._order = source._order
        obj._nodes = source._nodes        # read-only, shared
        obj._weights = source._weights    # read-only, shared
        obj._values = _freeze(values)
        obj.build_time = 0.0
        return obj

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> np.ndarray:
        """Interpolation nodes (read-only array)."""
        return self._nodes

    @property
    def values(self) -> np.ndarray:
        """Sample values (read-only array)."""
        return self._values

    @property
    def weights(self) -> np.ndarray:
        """Barycentric weights (read-only array)."""
        return self._weights

    @property
    def order(self) -> int:
        return self._order

    @property
    def n_nodes(self) -> int:
        return len(self._nodes)

    def weight(self, i: int):
        """Return the barycentric weight of node *i*.

        Raises
        ------
        IndexError
            If *i* is not in ``range(n_nodes)``.
        """
        i = operator.index(i)
        if not 0 <= i < self.n_nodes:
            raise IndexError(
                f"weight index {i} out of range for {self.n_nodes} nodes"
            )
        return self._weights[i]

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def value(self, t):
        """Evaluate the interpolant at *t*.

        If *t* equals a node exactly, the stored sample is returned as is.
        Otherwise the barycentric sums are accumulated in plain (not
        compensated) arithmetic, which bounds the precision for very large
        node counts. A query within a subnormal distance of a node returns
        that node's sample, the limit of the rational function there.

        Parameters
        ----------
        t : scalar
            Query point. Points outside the node span are extrapolated.

        Returns
        -------
        scalar
            Interpolated value, or ``nan`` (with a :class:`RuntimeWarning`)
            if the denominator vanishes at *t*.
        """
        return barycentric_rational_eval(
            t, self._nodes, self._values, self._weights, stacklevel=2
        )

    def __call__(self, t):
        return barycentric_rational_eval(
            t, self._nodes, self._values, self._weights, stacklevel=2
        )

    def eval_batch(self, points) -> np.ndarray:
        """Evaluate the interpolant at every entry of *points*.

        Parameters
        ----------
        points : array_like
            Query points of any shape.

        Returns
        -------
        ndarray
            Interpolated values, same shape as *points*.
        """
        points = np.asarray(points)
        if points.dtype == object or self._nodes.dtype == object:
            results = np.empty(points.size, dtype=object)
            for k, t in enumerate(points.ravel()):
                results[k] = barycentric_rational_eval(
                    t, self._nodes, self._values, self._weights, stacklevel=2
                )
            return results.reshape(points.shape)
        return barycentric_rational_eval_batch(
            points, self._nodes, self._values, self._weights, stacklevel=2
        )

    def derivative(self, t):
        """Evaluate the first derivative of the interpolant at *t*.

        Uses the quotient rule on the barycentric sums away from the nodes
        and the closed-form limit at a node.

        Returns
        -------
        scalar
            ``r'(t)``, or ``nan`` (with a :class:`RuntimeWarning`) if the
            denominator vanishes at *t*.
        """
        return barycentric_rational_derivative(
            t, self._nodes, self._values, self._weights, stacklevel=2
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def __getstate__(self) -> dict:
        """Return picklable state tagged with the package version."""
        from pybaryrational._version import __version__

        state = self.__dict__.copy()
        state["_pybaryrational_version"] = __version__
        return state

    def __setstate__(self, state: dict) -> None:
        """Restore state and mark the arrays read-only."""
        from pybaryrational._version import __version__

        saved_version = state.pop("_pybaryrational_version", None)
        if saved_version is not None and saved_version != __version__:
            warnings.warn(
                f"This object was saved with pybaryrational {saved_version}, "
                f"but you are loading it with {__version__}. "
                f"Evaluation results may differ if internal data layout changed.",
                UserWarning,
                stacklevel=2,
            )

        self.__dict__.update(state)
        for name in ("_nodes", "_values", "_weights"):
            _freeze(getattr(self, name))

    def save(self, path: str | os.PathLike) -> None:
        """Save the interpolant to a file.

        Parameters
        ----------
        path : str or path-like
            Destination file path.
        """
        with open(os.fspath(path), "wb") as f:
            pickle.dump(self, f, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, path: str | os.PathLike) -> "BarycentricRational":
        """Load a previously saved interpolant from a file.

        Parameters
        ----------
        path : str or path-like
            Path to the saved file.

        Returns
        -------
        BarycentricRational
            The restored interpolant, ready to evaluate.

        Warns
        -----
        UserWarning
            If the file was saved with a different pybaryrational version.

        .. warning::

            This method uses :mod:`pickle` internally. Pickle can execute
            arbitrary code during deserialization. **Only load files you
            trust.**
        """
        with open(os.fspath(path), "rb") as f:
            obj = pickle.load(f)  # noqa: S301
        if not isinstance(obj, cls):
            raise TypeError(
                f"Expected a {cls.__name__} instance, got {type(obj).__name__}"
            )
        return obj

    # ------------------------------------------------------------------
    # Arithmetic operators
    # ------------------------------------------------------------------

    def _scaled(self, factor):
        if self._values.dtype != object:
            factor = float(factor)
        return BarycentricRational._from_parts(self, self._values * factor)

    def __add__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        from pybaryrational._algebra import _check_compatible
        _check_compatible(self, other)
        return BarycentricRational._from_parts(self, self._values + other._values)

    def __sub__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        from pybaryrational._algebra import _check_compatible
        _check_compatible(self, other)
        return BarycentricRational._from_parts(self, self._values - other._values)

    def __mul__(self, scalar):
        from pybaryrational._algebra import _is_scalar
        if not _is_scalar(scalar):
            return NotImplemented
        return self._scaled(scalar)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __truediv__(self, scalar):
        from pybaryrational._algebra import _is_scalar
        if not _is_scalar(scalar):
            return NotImplemented
        if self._values.dtype == object:
            return BarycentricRational._from_parts(self, self._values / scalar)
        return self._scaled(1.0 / float(scalar))

    def __neg__(self):
        return self._scaled(-1)

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"BarycentricRational("
            f"n_nodes={self.n_nodes}, "
            f"order={self.order})"
        )

    def __str__(self) -> str:
        lo, hi = self._nodes[0], self._nodes[-1]
        lines = [
            f"BarycentricRational ({self.n_nodes} nodes, order {self.order})",
            f"  Span:    [{lo}, {hi}]",
            f"  Dtype:   {self._nodes.dtype}",
            f"  Build:   {self.build_time:.3f}s",
        ]
        return "\n".join(lines)
