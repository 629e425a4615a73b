"""
Compare Floater-Hormann interpolation against polynomial interpolation on
Runge's function 1/(1 + 25 x^2) over [-1, 1].

Tests:
1. Equispaced nodes, n = 11..81: max error of order d = 0, 3, 5, 8 vs the
   polynomial interpolant (order n - 1)
2. Random nodes with gaps varying by 10x: same comparison
3. Timing: construction vs evaluation cost

The polynomial interpolant is the special case d = n - 1, so both sides use
the same BarycentricRational code path.

Usage:
    python compare_runge.py

NOTE: This script is for local benchmarking only. It is NOT part of the
test suite.
"""

import time

import numpy as np

from pybaryrational import BarycentricRational


def runge(x):
    return 1.0 / (1.0 + 25.0 * x * x)


ORDERS = [0, 3, 5, 8]
TEST_GRID = np.linspace(-1.0, 1.0, 2001)


def max_error(r):
    return float(np.max(np.abs(r.eval_batch(TEST_GRID) - runge(TEST_GRID))))


def error_table(title, node_sets):
    print(f"\n{'=' * 70}")
    print(title)
    print(f"{'=' * 70}")
    header = f"{'n':>5}" + "".join(f"{'d=' + str(d):>12}" for d in ORDERS) + f"{'poly':>12}"
    print(header)
    for x in node_sets:
        n = len(x)
        y = runge(x)
        row = f"{n:>5}"
        for d in ORDERS:
            row += f"{max_error(BarycentricRational(x, y, order=d)):>12.2e}"
        row += f"{max_error(BarycentricRational(x, y, order=n - 1)):>12.2e}"
        print(row)


def random_nodes(n, seed):
    rng = np.random.default_rng(seed)
    gaps = rng.uniform(1.0, 10.0, size=n - 1)
    x = np.concatenate(([0.0], np.cumsum(gaps)))
    return -1.0 + 2.0 * x / x[-1]


if __name__ == "__main__":
    sizes = [11, 21, 41, 81]

    error_table("1. Equispaced nodes",
                [np.linspace(-1.0, 1.0, n) for n in sizes])
    error_table("2. Irregular nodes (gap ratio up to 10)",
                [random_nodes(n, seed=n) for n in sizes])

    print(f"\n{'=' * 70}")
    print("3. Timing (order 3)")
    print(f"{'=' * 70}")
    for n in [100, 1000]:
        x = np.linspace(-1.0, 1.0, n)
        y = runge(x)
        start = time.time()
        r = BarycentricRational(x, y, order=3)
        build = time.time() - start

        start = time.time()
        for t in TEST_GRID[:200]:
            r(t)
        scalar = (time.time() - start) / 200

        start = time.time()
        r.eval_batch(TEST_GRID)
        batch = (time.time() - start) / len(TEST_GRID)

        print(f"  n={n:>5}: build {build * 1e3:8.2f} ms, "
              f"scalar eval {scalar * 1e6:8.2f} us, "
              f"batch eval {batch * 1e6:8.3f} us/point")
