"""
Natural cubic splines in one dimension.

A natural cubic spline through data `(X, Y)` is fully described by its second
derivatives `Y2` at the data sites, which are zero at both ends. Build `Y2`
once with `natural_spline_coeffs`, locate the interval containing an
evaluation site with `spline_interval`, then evaluate the spline or its
derivatives with `spline_val` and `spline_val_deriv`.
"""

import numpy as np
import numba as nb


@nb.njit
def natural_spline_coeffs(X, Y):
    """
    Second derivatives of the natural cubic spline interpolating `Y` to `X`

    Parameters
    ----------
    X : ndarray, 1d
        Independent variable. Must be strictly increasing, with at least 2
        elements.
    Y : ndarray, 1d
        Dependent variable, same length as `X`.

    Returns
    -------
    Y2 : ndarray, 1d
        Second derivative of the spline at each `X`. `Y2[0] == Y2[-1] == 0`.

    Notes
    -----
    Solves the tridiagonal system for continuity of the first derivative at
    the interior knots directly, by forward decomposition and back
    substitution, in O(len(X)) operations.

    Based on the function "spline": Press, W.H. et al., 1988,
    "Numerical Recipes", 94-110.
    """
    n = X.size
    Y2 = np.zeros(n)
    u = np.zeros(n)

    # Decomposition loop of the tridiagonal algorithm
    for i in range(1, n - 1):
        sig = (X[i] - X[i - 1]) / (X[i + 1] - X[i - 1])
        p = sig * Y2[i - 1] + 2.0
        Y2[i] = (sig - 1.0) / p
        u[i] = (Y[i + 1] - Y[i]) / (X[i + 1] - X[i]) - (Y[i] - Y[i - 1]) / (
            X[i] - X[i - 1]
        )
        u[i] = (6.0 * u[i] / (X[i + 1] - X[i - 1]) - sig * u[i - 1]) / p

    # Back substitution loop of the tridiagonal algorithm
    Y2[n - 1] = 0.0
    for k in range(n - 2, -1, -1):
        Y2[k] = Y2[k] * Y2[k + 1] + u[k]

    return Y2


@nb.njit
def spline_interval(x, X):
    """
    Index of the interval of `X` containing `x`

    Parameters
    ----------
    x : float
        Evaluation site.
    X : ndarray, 1d
        Strictly increasing independent variable, with at least 2 elements.

    Returns
    -------
    i : int
        Such that `X[i] <= x < X[i+1]` when `X[0] <= x < X[-1]`. Clamped to
        `0 <= i <= len(X) - 2`, so `x == X[-1]` falls in the last interval.
    """
    lo = 0
    hi = X.size - 1
    while hi - lo > 1:
        k = (hi + lo) >> 1
        if X[k] > x:
            hi = k
        else:
            lo = k
    return lo


@nb.njit
def _weights(x, X, i):
    h = X[i + 1] - X[i]
    a = (X[i + 1] - x) / h
    b = (x - X[i]) / h
    return a, b, h


@nb.njit
def spline_val(x, X, Y, Y2, i):
    """
    Evaluate a natural cubic spline

    Parameters
    ----------
    x : float
        Evaluation site.
    X, Y : ndarray, 1d
        Data interpolated by the spline.
    Y2 : ndarray, 1d
        Second derivatives from `natural_spline_coeffs(X, Y)`.
    i : int
        Interval containing `x`, from `spline_interval(x, X)`.

    Returns
    -------
    y : float
        The spline evaluated at `x`.
    """
    a, b, h = _weights(x, X, i)
    return (
        a * Y[i]
        + b * Y[i + 1]
        + (a * (a * a - 1.0) * Y2[i] + b * (b * b - 1.0) * Y2[i + 1]) * (h * h) / 6.0
    )


@nb.njit
def spline_val_deriv(x, X, Y, Y2, i):
    """
    Evaluate a natural cubic spline and its first two derivatives

    Inputs are as for `spline_val`.

    Returns
    -------
    y, dy, d2y : float
        The spline, its first derivative and its second derivative at `x`.
    """
    a, b, h = _weights(x, X, i)
    y = (
        a * Y[i]
        + b * Y[i + 1]
        + (a * (a * a - 1.0) * Y2[i] + b * (b * b - 1.0) * Y2[i + 1]) * (h * h) / 6.0
    )
    dy = (Y[i + 1] - Y[i]) / h + (
        (3.0 * b * b - 1.0) * Y2[i + 1] - (3.0 * a * a - 1.0) * Y2[i]
    ) * h / 6.0
    d2y = a * Y2[i] + b * Y2[i + 1]
    return y, dy, d2y


@nb.njit
def spline_columns_coeffs(Y, V):
    """
    Natural spline second derivatives along the last axis of `V`

    Parameters
    ----------
    Y : ndarray, 1d
        Strictly increasing independent variable, of length `m`.
    V : ndarray, 2d
        Dependent data of shape `(n, m)`; row `V[i]` is interpolated to `Y`.

    Returns
    -------
    V2 : ndarray, 2d
        `V2[i] == natural_spline_coeffs(Y, V[i])` for each row `i`.
    """
    n = V.shape[0]
    V2 = np.empty((n, Y.size))
    for i in range(n):
        V2[i] = natural_spline_coeffs(Y, V[i])
    return V2


@nb.njit
def spline_columns_val(y, Y, V, V2, j):
    """
    Evaluate every row's natural spline along the last axis at `y`

    `V2` is from `spline_columns_coeffs(Y, V)` and `j` is
    `spline_interval(y, Y)`. Returns a 1d array of length `V.shape[0]`.
    """
    n = V.shape[0]
    v = np.empty(n)
    for i in range(n):
        v[i] = spline_val(y, Y, V[i], V2[i], j)
    return v
