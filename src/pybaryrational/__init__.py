"""PyBaryRational: Floater-Hormann barycentric rational interpolation.

Provides the :class:`BarycentricRational` class for smooth, pole-free
interpolation of 1-D data on strictly increasing (not necessarily evenly
spaced) nodes, and :func:`compute_floater_hormann_weights` for the weight
table on its own. Evaluation is exact at the nodes, O(n) per query, and
works for floats as well as exact scalar types such as
:class:`fractions.Fraction`.

Example
-------
>>> import math
>>> from pybaryrational import BarycentricRational
>>> x = [0.1 * i for i in range(31)]
>>> r = BarycentricRational.from_function(math.sin, x, order=4)
>>> bool(abs(r(1.234) - math.sin(1.234)) < 1e-4)
True
"""

from pybaryrational._version import __version__
from pybaryrational.barycentric import (
    DEFAULT_ORDER,
    BarycentricRational,
    compute_floater_hormann_weights,
)

__all__ = [
    "BarycentricRational",
    "DEFAULT_ORDER",
    "compute_floater_hormann_weights",
    "__version__",
]
