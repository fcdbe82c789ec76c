#!/usr/bin/env python3
"""Grids of the Poisson problem.

A grid holds N*M interior unknowns and a one cell border, stored row major
so that the point (i, j) sits at the flat offset i*(M+2)+j.
"""

import numpy as np

H = 0.01
F = 1.5


def grid_shape(N, M):
    return (N + 2, M + 2)


def zeros_grid(N, M):
    """Zero initialized grid, the border holds the boundary condition."""
    return np.zeros(grid_shape(N, M), dtype=np.float64)


def as_grid(buf, N, M):
    """
    2D view of a grid buffer.

    buf can be the flat buffer or the 2D array itself, in both cases the
    returned view shares its memory with buf.
    """
    assert buf.dtype == np.float64
    assert buf.size == (N + 2) * (M + 2)
    assert buf.flags.c_contiguous
    return buf.reshape(grid_shape(N, M))


def interior(grid):
    return grid[1:-1, 1:-1]


def border_is_zero(grid):
    """Check that every border cell holds exactly 0."""
    return bool(
        np.all(grid[0, :] == 0.0)
        and np.all(grid[-1, :] == 0.0)
        and np.all(grid[:, 0] == 0.0)
        and np.all(grid[:, -1] == 0.0)
    )


def source_term(N, M, h=H, f=F):
    """Right hand side h**2*f, f being constant on the whole domain."""
    b = zeros_grid(N, M)
    b[1:-1, 1:-1] = h * h * f
    return b
