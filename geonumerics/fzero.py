"""
Functions for finding the zero of a univariate function.
"""

import numpy as np
from time import time

from .errors import BracketError, ConvergenceError
from .function import as_callable
from .machine import machine_epsilon

MAXITER = 100  # default cap on the number of Brent iterations


def brent(f, a, b, t=1e-6, args=(), maxiter=MAXITER, diags=False, output=False):
    """
    Find a zero of a univariate function within a given range

    This is a bracketed root-finding method, so `f(a)` and `f(b)` must differ in
    sign. If they do, a root is guaranteed to be found.

    Parameters
    ----------
    f : ScalarFunction or function
        Continuous function of a single variable.
    a, b : float
        Range within which to search, satisfying `f(a) * f(b) <= 0`.
        Either order is accepted.
    t : float, Default 1e-6
        Absolute tolerance for convergence. A relative tolerance of
        `2 * eps * |x|` is added to it, `eps` being the machine epsilon.
    args : tuple
        Additional arguments, beyond the optimization argument, to be passed to `f`.
        Pass `()` when `f` is univariate.
    maxiter : int, Default 100
        Maximum number of iterations, each costing one evaluation of `f`.
    diags : bool, Default False
        If True, also return a dict of diagnostics.
    output : bool, Default False
        If True and `diags` is True, print a summary on completion.

    Returns
    -------
    x : float
        Value of `x` where `f(x) ~ 0`.
    d : dict
        Only returned when `diags` is True. Contains
        - "niter" : number of iterations
        - "nfev" : number of evaluations of `f`
        - "fx" : value of `f` at `x`
        - "timer" : time spent, in seconds

    Raises
    ------
    BracketError
        If `f(a)` and `f(b)` have the same sign, or either is NaN.
    ConvergenceError
        If the tolerance is not met within `maxiter` iterations.

    Notes
    -----
    Errors raised by `f` are not caught.

    Each step uses inverse quadratic interpolation through the three most
    recent distinct points, or the secant step through the two most recent
    when only two are distinct. Bisection is used instead when the
    interpolated point leaves the bracket or the step fails to be less than
    half the step before last, which guarantees convergence.

    Adapted from the `zeroin` algorithm of Forsythe, Malcolm and Moler,
    "Computer Methods for Mathematical Computations", 1977.
    """

    timer = time()
    fn = as_callable(f, args)
    eps = machine_epsilon()

    # Protection against bad input search range
    if np.isnan(a) or np.isnan(b):
        raise BracketError(f"Search range [{a}, {b}] contains NaN")

    fa = fn(a)
    fb = fn(b)
    nfev = 2

    # Protection against input range that doesn't have a sign change
    if np.isnan(fa) or np.isnan(fb):
        raise BracketError(f"f is NaN at an end of the search range [{a}, {b}]")
    if (0.0 < fa and 0.0 < fb) or (fa < 0.0 and fb < 0.0):
        raise BracketError(
            f"f does not change sign over [{a}, {b}]: f(a) = {fa}, f(b) = {fb}"
        )

    c = a
    fc = fa
    e = b - a
    d = e

    niter = 0
    while True:
        if abs(fc) < abs(fb):
            a = b
            b = c
            c = a
            fa = fb
            fb = fc
            fc = fa

        tol = 2.0 * eps * abs(b) + t
        m = 0.5 * (c - b)

        if abs(m) <= tol or fb == 0.0:
            break

        if niter == maxiter:
            raise ConvergenceError(
                f"Root not found to tolerance {t} in {maxiter} iterations; "
                f"last bracket [{min(b, c)}, {max(b, c)}]",
                maxiter=maxiter,
            )
        niter += 1

        if abs(e) < tol or abs(fa) <= abs(fb):
            e = m
            d = e
        else:
            s = fb / fa
            if a == c:
                # secant step
                p = 2.0 * m * s
                q = 1.0 - s
            else:
                # inverse quadratic interpolation
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * m * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)

            if 0.0 < p:
                q = -q
            else:
                p = -p

            s = e
            e = d

            if 2.0 * p < 3.0 * m * q - abs(tol * q) and p < abs(0.5 * s * q):
                d = p / q
            else:
                e = m
                d = e

        a = b
        fa = fb

        if tol < abs(d):
            b += d
        elif 0.0 < m:
            b += tol
        else:
            b -= tol

        fb = fn(b)
        nfev += 1

        if (0.0 < fb and 0.0 < fc) or (fb <= 0.0 and fc <= 0.0):
            c = a
            fc = fa
            e = b - a
            d = e

    if not diags:
        return b

    d = {"niter": niter, "nfev": nfev, "fx": fb, "timer": time() - timer}
    if output:
        print(
            f"brent done | {niter:4d} iters | {nfev:4d} evals"
            f" | x = {b:.15e} | f(x) = {fb:.8e} | {d['timer']:.3f} sec"
        )
    return b, d


find_root = brent
