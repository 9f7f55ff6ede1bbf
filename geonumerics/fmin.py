"""
Functions for finding a minimum or maximum of a univariate function.
"""

import numpy as np
from time import time

from .errors import BracketError, ConvergenceError
from .function import as_callable
from .machine import machine_epsilon

MAXITER = 100  # default cap on the number of Brent iterations

CGOLD = 0.3819660112501051  # (3 - sqrt(5)) / 2, the golden section ratio


def minimize(f, a, b, c, t=1e-6, args=(), maxiter=MAXITER, diags=False, output=False):
    """
    Find a local minimum of a univariate function within a bracketing triplet

    Parameters
    ----------
    f : ScalarFunction or function
        Function of a single variable.
    a, b, c : float
        Bracketing triplet: `b` lies between `a` and `c` (in either order), and
        `f(b) <= f(a)` and `f(b) <= f(c)`.
    t : float, Default 1e-6
        Relative tolerance for convergence. Values below
        `geonumerics.machine.default_precision()` are rarely meaningful.
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
        Abscissa of the minimum.
    d : dict
        Only returned when `diags` is True. Contains
        - "niter" : number of iterations
        - "nfev" : number of evaluations of `f`
        - "fx" : value of `f` at `x`
        - "timer" : time spent, in seconds

    Raises
    ------
    BracketError
        If `(a, b, c)` is not a bracketing triplet.
    ConvergenceError
        If the tolerance is not met within `maxiter` iterations.

    Notes
    -----
    Errors raised by `f` are not caught.

    Each step is the vertex of the parabola through the three best points so
    far, provided it lies inside the bracket and moves less than half the step
    before last. Otherwise a golden section step is taken into the larger of
    the two sub-intervals about the best point. Iteration stops once the
    bracket about the best point `x` has half-width at most
    `2 * (t * |x| + 2 * eps)`, `eps` being the machine epsilon.

    Based on the function "brent": Press, W.H. et al., 1988,
    "Numerical Recipes", 299-302.
    """
    return _brent_extremum(
        f, a, b, c, t, args, maxiter, diags, output, 1.0, "minimize"
    )


def maximize(f, a, b, c, t=1e-6, args=(), maxiter=MAXITER, diags=False, output=False):
    """
    Find a local maximum of a univariate function within a bracketing triplet

    As `minimize`, applied to `-f`. The bracketing triplet must satisfy
    `f(b) >= f(a)` and `f(b) >= f(c)`. With `diags`, `d["fx"]` is the value of
    `f` (not `-f`) at the maximum.
    """
    return _brent_extremum(
        f, a, b, c, t, args, maxiter, diags, output, -1.0, "maximize"
    )


def _brent_extremum(f, ax, bx, cx, t, args, maxiter, diags, output, sign, name):
    """Brent's method for the minimum of `sign * f`."""

    timer = time()
    fn = as_callable(f, args)
    zeps = 2.0 * machine_epsilon()

    if np.isnan(ax) or np.isnan(bx) or np.isnan(cx):
        raise BracketError(f"Bracket ({ax}, {bx}, {cx}) contains NaN")
    if not (min(ax, cx) <= bx <= max(ax, cx)):
        raise BracketError(f"b = {bx} does not lie between a = {ax} and c = {cx}")

    fa = sign * fn(ax)
    fx = sign * fn(bx)
    fc = sign * fn(cx)
    nfev = 3
    if not (fx <= fa and fx <= fc):
        kind = "minimum" if sign > 0 else "maximum"
        raise BracketError(
            f"({ax}, {bx}, {cx}) does not bracket a {kind}: "
            f"f = ({sign * fa}, {sign * fx}, {sign * fc})"
        )

    # a and b bracket the extremum; x is the best point so far, w the second
    # best, v the previous value of w.
    a = min(ax, cx)
    b = max(ax, cx)
    x = w = v = bx
    fw = fv = fx
    d = e = 0.0

    niter = 0
    while True:
        xm = 0.5 * (a + b)
        tol1 = t * abs(x) + zeps
        tol2 = 2.0 * tol1

        if abs(x - xm) <= tol2 - 0.5 * (b - a):
            break

        if niter == maxiter:
            raise ConvergenceError(
                f"{name} did not converge to tolerance {t} in {maxiter} "
                f"iterations; last bracket [{a}, {b}]",
                maxiter=maxiter,
            )
        niter += 1

        if abs(e) > tol1:
            # Trial parabolic fit through x, v, w
            r = (x - w) * (fx - fv)
            q = (x - v) * (fx - fw)
            p = (x - v) * q - (x - w) * r
            q = 2.0 * (q - r)
            if q > 0.0:
                p = -p
            q = abs(q)
            etemp = e
            e = d

            if abs(p) >= abs(0.5 * q * etemp) or p <= q * (a - x) or p >= q * (b - x):
                # Golden section step into the larger sub-interval
                e = (a - x) if x >= xm else (b - x)
                d = CGOLD * e
            else:
                # Parabolic step
                d = p / q
                u = x + d
                if u - a < tol2 or b - u < tol2:
                    d = tol1 if xm - x >= 0.0 else -tol1
        else:
            e = (a - x) if x >= xm else (b - x)
            d = CGOLD * e

        # Never evaluate closer than tol1 to x
        if abs(d) >= tol1:
            u = x + d
        elif d < 0.0:
            u = x - tol1
        else:
            u = x + tol1

        fu = sign * fn(u)
        nfev += 1

        if fu <= fx:
            if u >= x:
                a = x
            else:
                b = x
            v, fv = w, fw
            w, fw = x, fx
            x, fx = u, fu
        else:
            if u < x:
                a = u
            else:
                b = u
            if fu <= fw or w == x:
                v, fv = w, fw
                w, fw = u, fu
            elif fu <= fv or v == x or v == w:
                v, fv = u, fu

    if not diags:
        return x

    d = {"niter": niter, "nfev": nfev, "fx": sign * fx, "timer": time() - timer}
    if output:
        print(
            f"{name} done | {niter:4d} iters | {nfev:4d} evals"
            f" | x = {x:.15e} | f(x) = {sign * fx:.8e} | {d['timer']:.3f} sec"
        )
    return x, d
