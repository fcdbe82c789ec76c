#!/usr/bin/env python3
"""Parallel kernels of the Jacobi solver.

Every kernel takes 2D grids of shape (N+2, M+2) and only touches the
interior points. The rows are distributed over numba's worker threads.
"""

from numba import jit, prange


@jit(nopython=True, cache=True, parallel=True)
def jacobi_step(x, b, t):
    """One Jacobi sweep, t = (b + sum of the 4 neighbours of x) / 4."""
    ny, nx = x.shape
    for j in prange(1, ny - 1):
        for i in range(1, nx - 1):
            t[j, i] = (
                b[j, i] + x[j + 1, i] + x[j - 1, i] + x[j, i + 1] + x[j, i - 1]
            ) / 4.0


@jit(nopython=True, cache=True, parallel=True)
def sq_diff(x, t):
    """Squared euclidean distance between the interiors of x and t."""
    ny, nx = x.shape
    s = 0.0
    for j in prange(1, ny - 1):
        row = 0.0
        for i in range(1, nx - 1):
            d = x[j, i] - t[j, i]
            row += d * d
        s += row
    return s


@jit(nopython=True, cache=True, parallel=True)
def copy_interior(src, dst):
    """Copy the interior of src into dst."""
    ny, nx = src.shape
    for j in prange(1, ny - 1):
        for i in range(1, nx - 1):
            dst[j, i] = src[j, i]
