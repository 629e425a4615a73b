"""Quick start example: interpolate irregular samples and compute derivatives."""

import math

import numpy as np

from pybaryrational import BarycentricRational


def f(x):
    """A smooth function: sin(x) * exp(-x / 3)."""
    return math.sin(x) * math.exp(-x / 3)


def df(x):
    return (math.cos(x) - math.sin(x) / 3) * math.exp(-x / 3)


# Irregular nodes on [0, 6]
rng = np.random.default_rng(0)
nodes = np.sort(np.concatenate(([0.0, 6.0], rng.uniform(0.0, 6.0, size=38))))

# Build interpolant
r = BarycentricRational.from_function(f, nodes, order=4, verbose=True)
print(r)

# Evaluate at a test point
t = 2.5
print(f"\nExact:  {f(t):.10f}")
print(f"Approx: {r(t):.10f}")
print(f"Error:  {abs(r(t) - f(t)):.2e}")

# Nodes are reproduced exactly
print(f"\nAt node {nodes[7]:.6f}: r = {r(nodes[7])!r}, f = {f(nodes[7])!r}")

# Derivative
print(f"\ndf/dx exact:  {df(t):.10f}")
print(f"df/dx approx: {r.derivative(t):.10f}")

# Vectorized evaluation
grid = np.linspace(0.0, 6.0, 1001)
err = np.max(np.abs(r.eval_batch(grid) - np.array([f(x) for x in grid])))
print(f"\nMax error on 1001-point grid: {err:.2e}")
