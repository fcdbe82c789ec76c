#!/usr/bin/env python3

"""Jacobi solver for the Poisson equation."""

from collections import namedtuple
from math import sqrt

import numba
import numpy as np

from jacobi_modules import jacobi_step, sq_diff, copy_interior
from poisson_grid import as_grid

TOL = 1e-6
MAXIT = 70000

JacobiResult = namedtuple("JacobiResult", ["iterations", "residual", "converged"])


class ScratchAllocationError(MemoryError):
    """The scratch iterate could not be allocated."""


def print_progress(k, residual):
    print(f"iteration {k:>6}  residual {residual:>9.2e}", flush=True)


def stencil_update(N, M, x, b, t):
    """
    Compute one Jacobi sweep of x into t.

    x, b and t are distinct grids of (N+2)*(M+2) points, flat or 2D.
    Only the interior of t is written.
    """
    x, b, t = as_grid(x, N, M), as_grid(b, N, M), as_grid(t, N, M)
    assert not np.may_share_memory(t, x) and not np.may_share_memory(t, b)
    jacobi_step(x, b, t)


class Jacobi:
    def __init__(self, b0, x0, tol=TOL, maxit=MAXIT, n_threads=None,
                 report=print_progress):
        """
        b0 : source term h**2*f, read only.
        x0 : initial guess, overwritten with the solution.
        n_threads : number of numba threads, None keeps the current setting.
        report : called with (iteration, residual) after every round.
        """
        assert x0.shape == b0.shape
        assert x0.ndim == 2
        assert not np.may_share_memory(x0, b0)
        self.b0 = b0
        self.x0 = x0
        self.tol = tol
        self.maxit = maxit
        self.n_threads = n_threads
        self.report = report
        self.it = 0
        self.residual = np.inf
        self.converged = False

    def _allocate_scratch(self):
        try:
            return np.zeros_like(self.x0)
        except MemoryError as e:
            raise ScratchAllocationError(
                f"cannot allocate a {self.x0.shape} scratch grid") from e

    def solve(self):
        """
        Iterate until the change between two iterates is smaller than tol
        or maxit rounds have been done.
        """
        old_threads = numba.get_num_threads()
        if self.n_threads is not None:
            numba.set_num_threads(self.n_threads)
        self.n_threads = numba.get_num_threads()
        try:
            self._iterate()
        finally:
            numba.set_num_threads(old_threads)
        return JacobiResult(self.it, self.residual, self.converged)

    def _iterate(self):
        b = self.b0
        x = self.x0
        t = self._allocate_scratch()
        self.it = 0
        self.residual = np.inf
        self.converged = False

        while not self.converged and self.it < self.maxit:
            jacobi_step(x, b, t)
            # Measured before the commit, x is still the previous iterate.
            s = sq_diff(x, t)

            self.residual = sqrt(s)
            self.converged = self.residual < self.tol
            if self.report is not None:
                self.report(self.it, self.residual)
            self.it += 1

            x, t = t, x

        # The last iterate may live in the scratch grid.
        if x is not self.x0:
            copy_interior(x, self.x0)


def warmup(n=4):
    """Trigger the compilation of the kernels on a small grid."""
    b = np.ones((n + 2, n + 2))
    x = np.zeros_like(b)
    Jacobi(b, x, maxit=3, report=None).solve()


def jacobi_poisson(N, M, x, b, tol=TOL, maxit=MAXIT, n_threads=None,
                   report=print_progress):
    """
    Solve the Poisson equation on a N*M interior grid, x is updated in place.

    x and b are (N+2)*(M+2) grids, flat or 2D, with a zero border.
    Return a JacobiResult telling whether tol was reached before maxit.
    """
    poisson = Jacobi(as_grid(b, N, M), as_grid(x, N, M), tol, maxit,
                     n_threads, report)
    return poisson.solve()
