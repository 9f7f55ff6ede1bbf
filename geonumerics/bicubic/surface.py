"""
Natural bicubic spline interpolation of a surface tabulated on a 2D grid.
"""

import numpy as np
import xarray as xr

from ..errors import IllegalStateError, InvalidGridError
from .spline import (
    natural_spline_coeffs,
    spline_columns_coeffs,
    spline_columns_val,
    spline_interval,
    spline_val_deriv,
)

MIN_GRID_SIZE = 4  # minimum number of grid points along each axis


class BicubicSurface:
    """
    Natural bicubic spline interpolant of values tabulated on a 2D grid

    Parameters
    ----------
    X : ndarray, 1d
        Strictly increasing x grid, with at least 4 elements.
    Y : ndarray, 1d
        Strictly increasing y grid, with at least 4 elements.
    V : ndarray, 2d
        Values to interpolate, of shape `(len(X), len(Y))`, with `V[i, j]`
        the value at `(X[i], Y[j])`.

    Notes
    -----
    Each query fits a natural cubic spline along y for every x grid point,
    evaluates each at the query y, then fits one natural cubic spline across x
    to those values and evaluates it, and its first and second derivatives
    with respect to x, at the query x.

    The grids are borrowed, not copied (unless `rebind(..., copy=True)` is
    used, or they are not already `float64` arrays). The caller must keep them
    alive and must not modify them while a query is running. Modifying them
    between queries is allowed; the next call to `interpolate` sees the new
    values, whereas `interpolate_new_y` and `interpolate_new_x` keep using the
    fits made by the previous `interpolate`.

    Queries outside the grid, or at NaN coordinates, give NaN results. There
    is no cubic extrapolation from the end intervals.

    Based on the function "splin2": Press, W.H. et al., 1988,
    "Numerical Recipes", 94-110.

    Examples
    --------
    >>> X = np.linspace(0.0, 3.0, 7)
    >>> Y = np.linspace(0.0, 1.0, 5)
    >>> V = np.add.outer(X**2, Y)
    >>> surf = BicubicSurface(X, Y, V)
    >>> v, dvdx, d2vdx2 = surf.interpolate(1.2, 0.5)
    >>> v2, dvdx2, d2vdx22 = surf.interpolate_new_y(0.6)  # reuses the y fits
    """

    def __init__(self, X, Y, V):
        self.rebind(X, Y, V)

    @classmethod
    def from_dataarray(cls, da, x_dim=None, y_dim=None):
        """
        Build an interpolant from a 2D `xarray.DataArray`

        Parameters
        ----------
        da : xarray.DataArray
            Values, with 1D coordinates along both dimensions.
        x_dim, y_dim : str, Default `da.dims[0]`, `da.dims[1]`
            Names of the x and y dimensions.

        Returns
        -------
        BicubicSurface
        """
        if not isinstance(da, xr.DataArray):
            raise TypeError(f"Expected an xarray.DataArray; got {type(da).__name__}")
        if da.ndim != 2:
            raise InvalidGridError(f"Expected a 2D DataArray; got dims {da.dims}")
        if x_dim is None:
            x_dim = da.dims[0] if y_dim != da.dims[0] else da.dims[1]
        if y_dim is None:
            y_dim = da.dims[1] if x_dim != da.dims[1] else da.dims[0]
        if x_dim == y_dim:
            raise InvalidGridError(f"x_dim and y_dim must differ; got {x_dim}")
        for dim in (x_dim, y_dim):
            if dim not in da.dims:
                raise InvalidGridError(f"dim = {dim} not found in da.dims")
            if dim not in da.coords:
                raise InvalidGridError(f"DataArray has no coordinate for dim = {dim}")

        da = da.transpose(x_dim, y_dim)
        return cls(da[x_dim].values, da[y_dim].values, da.values)

    def rebind(self, X, Y, V, copy=False):
        """
        Replace the grid and values, discarding all previous results

        Parameters
        ----------
        X, Y, V : ndarray
            As for the constructor.
        copy : bool, Default False
            If True, keep private copies of the inputs rather than references.

        Raises
        ------
        InvalidGridError
            If either axis is not strictly increasing or has fewer than 4
            points, or `V.shape != (len(X), len(Y))`.
        """
        X, Y, V = _check_grid(X, Y, V)
        if copy:
            X, Y, V = X.copy(), Y.copy(), V.copy()
        self._X = X
        self._Y = Y
        self._V = V
        self._reset()

    def _reset(self):
        self._x = self._y = None
        self._i = self._j = -1
        self._V2 = None  # y spline second derivatives, one row per x grid point
        self._vx = None  # y splines evaluated at self._y
        self._vx2 = None  # x spline second derivatives
        self._result = None

    @property
    def X(self):
        return self._X

    @property
    def Y(self):
        return self._Y

    @property
    def V(self):
        return self._V

    def interpolate(self, x, y):
        """
        Interpolate the surface at `(x, y)`

        Parameters
        ----------
        x, y : float
            Interpolation site.

        Returns
        -------
        v, dvdx, d2vdx2 : float
            Interpolated value, and its first and second derivatives with
            respect to x.
        """
        x = float(x)
        y = float(y)
        i = _locate(x, self._X)
        self._V2 = spline_columns_coeffs(self._Y, self._V)
        self._x = x
        self._i = i
        return self._eval_new_y(y)

    def interpolate_new_y(self, y):
        """
        Interpolate at a new `y`, keeping the `x` of the previous query

        The splines along y made by the last `interpolate` call are reused, so
        only the spline across x is refit. The result is identical to
        `interpolate(x, y)` with the previous `x`.

        Raises
        ------
        IllegalStateError
            If `interpolate` has not been called since the grid was bound.
        """
        self._check_interpolated("interpolate_new_y")
        return self._eval_new_y(y)

    def interpolate_new_x(self, x):
        """
        Interpolate at a new `x`, keeping the `y` of the previous query

        No spline is refit. The result is identical to `interpolate(x, y)`
        with the previous `y`.

        Raises
        ------
        IllegalStateError
            If `interpolate` has not been called since the grid was bound.
        """
        self._check_interpolated("interpolate_new_x")
        x = float(x)
        self._i = _locate(x, self._X)
        self._x = x
        return self._eval()

    def _eval_new_y(self, y):
        y = float(y)
        self._y = y
        self._j = _locate(y, self._Y)
        if self._j < 0:
            self._vx = self._vx2 = None
        else:
            self._vx = spline_columns_val(y, self._Y, self._V, self._V2, self._j)
            self._vx2 = natural_spline_coeffs(self._X, self._vx)
        return self._eval()

    def _eval(self):
        if self._i < 0 or self._vx is None:
            self._result = (np.nan, np.nan, np.nan)
        else:
            v, dv, d2v = spline_val_deriv(
                self._x, self._X, self._vx, self._vx2, self._i
            )
            self._result = (float(v), float(dv), float(d2v))
        return self._result

    def is_x_bracketed(self, x):
        """True if `X[0] <= x <= X[-1]`; False otherwise, including NaN or inf."""
        return _locate(x, self._X) >= 0

    def is_y_bracketed(self, y):
        """True if `Y[0] <= y <= Y[-1]`; False otherwise, including NaN or inf."""
        return _locate(y, self._Y) >= 0

    def interpolation_point(self):
        """The `(x, y)` site of the most recent query."""
        self._check_result("interpolation_point")
        return self._x, self._y

    def last_result(self):
        """The `(v, dvdx, d2vdx2)` triple of the most recent query."""
        self._check_result("last_result")
        return self._result

    def last_value(self):
        """Interpolated value from the most recent query."""
        self._check_result("last_value")
        return self._result[0]

    def last_derivative(self):
        """Interpolated first x derivative from the most recent query."""
        self._check_result("last_derivative")
        return self._result[1]

    def last_second_derivative(self):
        """Interpolated second x derivative from the most recent query."""
        self._check_result("last_second_derivative")
        return self._result[2]

    def _check_interpolated(self, name):
        if self._V2 is None:
            raise IllegalStateError(f"{name} called before interpolate")

    def _check_result(self, name):
        if self._result is None:
            raise IllegalStateError(f"{name} called before any interpolation")


def _locate(x, X):
    """Interval of `X` containing `x`, or -1 if `x` is outside `X` or NaN."""
    if not (X[0] <= x <= X[-1]):
        return -1
    return spline_interval(float(x), X)


def _check_grid(X, Y, V):
    try:
        X = np.asarray(X, dtype=np.float64)
        Y = np.asarray(Y, dtype=np.float64)
        V = np.asarray(V, dtype=np.float64)
    except (TypeError, ValueError) as err:
        raise InvalidGridError("Grid is not convertible to float arrays") from err

    for name, A in (("X", X), ("Y", Y)):
        if A.ndim != 1:
            raise InvalidGridError(f"{name} must be 1D; got shape {A.shape}")
        if A.size < MIN_GRID_SIZE:
            raise InvalidGridError(
                f"{name} must have at least {MIN_GRID_SIZE} elements; got {A.size}"
            )
        if not np.all(np.isfinite(A)):
            raise InvalidGridError(f"{name} must be finite")
        if not np.all(A[1:] > A[:-1]):
            raise InvalidGridError(f"{name} must be strictly increasing")

    if V.shape != (X.size, Y.size):
        raise InvalidGridError(
            f"V has shape {V.shape}; expected (len(X), len(Y)) = {(X.size, Y.size)}"
        )

    return X, Y, V
