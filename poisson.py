#!/usr/bin/env python3

"""Solve the Poisson equation with a constant source term on a N*M grid."""

import argparse
import sys
from time import perf_counter

import numba
import numpy as np
import matplotlib.pyplot as plt

from poisson_grid import zeros_grid, source_term, interior, H, F
from solver import Jacobi, print_progress, warmup, TOL, MAXIT

DEFAULT_N = 50
DEFAULT_M = 50


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("N", type=int, nargs="?",
                        help=f"interior rows, {DEFAULT_N} if absent or negative")
    parser.add_argument("M", type=int, nargs="?",
                        help=f"interior columns, {DEFAULT_M} if absent, "
                        "1 if negative")
    parser.add_argument("--threads", type=int, default=None,
                        help="number of numba threads")
    parser.add_argument("--h", type=float, default=H, help="grid step")
    parser.add_argument("--f", type=float, default=F,
                        help="value of the source term")
    parser.add_argument("--tol", type=float, default=TOL)
    parser.add_argument("--maxit", type=int, default=MAXIT)
    parser.add_argument("--output", default="output.txt",
                        help="report file")
    parser.add_argument("--matrix", default="matrix_poisson.txt",
                        help="solution file")
    parser.add_argument("--plot", default=None,
                        help="save a figure of the solution in this file")
    parser.add_argument("--quiet", action="store_true",
                        help="do not print the residual of every iteration")
    args = parser.parse_args(argv)

    max_threads = numba.config.NUMBA_NUM_THREADS
    if args.threads is not None and not 1 <= args.threads <= max_threads:
        parser.error(f"--threads must be between 1 and {max_threads}")

    if args.N is None or args.N < 0:
        args.N = DEFAULT_N
    if args.M is None:
        args.M = DEFAULT_M
    elif args.M < 0:
        args.M = 1
    return args


def write_report(path, t_solve, N, M, n_threads, result):
    if result.converged:
        reason = "converged"
    else:
        reason = "iteration cap reached"
    with open(path, "w") as out:
        out.write("Version 'poisson.py' numba parallel\n")
        out.write(f"Compute time of 'jacobi_poisson': {t_solve:f} s\n")
        out.write(f"Size: (N,M) = ({N}, {M})\n")
        out.write(f"Threads used: {n_threads}\n")
        out.write(f"Iterations: {result.iterations}\n")
        out.write(f"Residual: {result.residual:g}\n")
        out.write(f"Termination: {reason}\n")


def write_matrix(path, x):
    """Interior of x, one row per line."""
    np.savetxt(path, interior(x), fmt="%g")


def plot_solution(path, x):
    """Save a figure of the interior of x, nothing is drawn if it is empty."""
    N, M = interior(x).shape
    if N == 0 or M == 0:
        return False
    fig, ax = plt.subplots()
    cm = ax.pcolormesh(interior(x))
    ax.set_title(f"{N}x{M} grid points")
    ax.set_aspect("equal")
    fig.colorbar(cm)
    fig.savefig(path)
    plt.close(fig)
    return True


def print_results(N, M, n_threads, result, t_solve):
    print(f"{'N':>6}{'M':>6}{'threads':>9}{'iterations':>12}"
          f"{'residual':>11}{'t_solve':>11}")
    print(f"{N:>6}{M:>6}{n_threads:>9}{result.iterations:>12}"
          f"{result.residual:>11.2e}{t_solve:>11.2e}", flush=True)


def main(argv=None):
    args = parse_args(argv)
    N, M = args.N, args.M

    x = zeros_grid(N, M)
    b = source_term(N, M, args.h, args.f)

    report = None if args.quiet else print_progress
    poisson = Jacobi(b, x, args.tol, args.maxit, args.threads, report)

    # Keep the compilation out of the timing.
    warmup()
    t0 = perf_counter()
    result = poisson.solve()
    t1 = perf_counter()

    print_results(N, M, poisson.n_threads, result, t1 - t0)
    write_report(args.output, t1 - t0, N, M, poisson.n_threads, result)
    write_matrix(args.matrix, x)
    if args.plot is not None and not plot_solution(args.plot, x):
        print(f"empty interior, no figure saved in {args.plot}", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
