import numpy as np
import pytest
import xarray as xr

from geonumerics.bicubic import BicubicSurface
from geonumerics.errors import IllegalStateError, InvalidGridError
from scipy.interpolate import CubicSpline

# Reference grid and results
X = np.array([39.0, 39.5, 40.0, 40.5, 41.0, 41.5, 42.0])
Y = np.array([35.0, 50.0, 75.0, 100.0])
V = np.array(
    [
        [442.9671, 441.4871, 439.0246, 436.5673],
        [447.1415, 445.658, 443.1895, 440.7262],
        [451.2988, 449.8117, 447.3374, 444.8681],
        [455.4391, 453.9485, 451.4683, 448.9932],
        [459.5623, 458.0683, 455.5823, 453.1014],
        [463.6686, 462.1711, 459.6794, 457.1926],
        [467.7578, 466.2568, 463.7593, 461.2666],
    ]
)
x0 = 40.84073276581503
y0 = 70.0
expected = (454.769981628745, 8.224224109065798, -0.0646680840265265)


@pytest.fixture
def surf():
    return BicubicSurface(X, Y, V)


def scipy_bicubic(x, y, X, Y, V):
    """Natural bicubic spline built from SciPy: y splines, then one x spline."""
    vx = CubicSpline(Y, V, axis=1, bc_type="natural")(y)
    fn = CubicSpline(X, vx, bc_type="natural")
    return fn(x), fn(x, 1), fn(x, 2)


def test_reference(surf):
    result = surf.interpolate(x0, y0)
    assert np.allclose(result, expected, rtol=0, atol=1e-9)
    assert surf.last_value() == result[0]
    assert surf.last_derivative() == result[1]
    assert surf.last_second_derivative() == result[2]
    assert surf.last_result() == result
    assert surf.interpolation_point() == (x0, y0)


def test_new_y_same_y_is_identical(surf):
    result = surf.interpolate(x0, y0)
    assert surf.interpolate_new_y(y0) == result


@pytest.mark.parametrize("y", [35.0, 42.0, 50.0, 88.8, 100.0])
def test_new_y_matches_fresh(surf, y):
    surf.interpolate(x0, y0)
    result = surf.interpolate_new_y(y)
    fresh = BicubicSurface(X, Y, V).interpolate(x0, y)
    assert result == fresh
    assert surf.interpolation_point() == (x0, y)


@pytest.mark.parametrize("x", [39.0, 39.2, 40.5, 41.9, 42.0])
def test_new_x_matches_fresh(surf, x):
    surf.interpolate(x0, y0)
    result = surf.interpolate_new_x(x)
    fresh = BicubicSurface(X, Y, V).interpolate(x, y0)
    assert result == fresh


@pytest.mark.parametrize(
    "x,y", [(39.1, 36.0), (x0, y0), (40.0, 50.0), (41.75, 99.0), (42.0, 100.0)]
)
def test_matches_scipy(surf, x, y):
    assert np.allclose(surf.interpolate(x, y), scipy_bicubic(x, y, X, Y, V), atol=1e-9)


def test_bilinear_data():
    Xl = np.linspace(0.0, 1.0, 5)
    Yl = np.linspace(-2.0, 2.0, 6)
    Vl = 2.0 * Xl[:, None] + 0.5 * Yl[None, :] + 1.0
    v, dv, d2v = BicubicSurface(Xl, Yl, Vl).interpolate(0.3, 0.7)
    assert abs(v - (2.0 * 0.3 + 0.5 * 0.7 + 1.0)) < 1e-12
    assert abs(dv - 2.0) < 1e-12
    assert abs(d2v) < 1e-12


@pytest.mark.parametrize("y", [35.0, 35.0 + 1e-7, 50.0, 75.0 - 1e-7, 75.0, 100.0])
def test_y_bracketed(surf, y):
    assert surf.is_y_bracketed(y)


@pytest.mark.parametrize("y", [35.0 - 1e-7, 100.0 + 1e-7, -np.inf, np.inf, np.nan])
def test_y_not_bracketed(surf, y):
    assert not surf.is_y_bracketed(y)


def test_x_bracketed(surf):
    assert surf.is_x_bracketed(39.0) and surf.is_x_bracketed(42.0)
    assert not surf.is_x_bracketed(42.5) and not surf.is_x_bracketed(np.nan)


@pytest.mark.parametrize("x,y", [(38.0, 50.0), (40.0, 101.0), (np.nan, 50.0)])
def test_outside_grid_is_nan(surf, x, y):
    result = surf.interpolate(x, y)
    assert all(np.isnan(r) for r in result)
    assert np.isnan(surf.last_value())


def test_accessors_before_query(surf):
    for method in (
        surf.last_value,
        surf.last_derivative,
        surf.last_second_derivative,
        surf.last_result,
        surf.interpolation_point,
    ):
        with pytest.raises(IllegalStateError):
            method()


def test_new_y_before_interpolate(surf):
    with pytest.raises(IllegalStateError):
        surf.interpolate_new_y(y0)
    with pytest.raises(IllegalStateError):
        surf.interpolate_new_x(x0)


def test_new_y_after_rebind(surf):
    surf.interpolate(x0, y0)
    surf.rebind(X, Y, 2.0 * V)
    with pytest.raises(IllegalStateError):
        surf.interpolate_new_y(y0)
    with pytest.raises(IllegalStateError):
        surf.interpolate_new_x(x0)


def test_bad_coordinate_keeps_previous_query(surf):
    first = surf.interpolate(x0, y0)
    with pytest.raises(TypeError):
        surf.interpolate(None, 50.0)
    with pytest.raises(ValueError):
        surf.interpolate("east", 50.0)
    assert surf.interpolation_point() == (x0, y0)
    assert surf.last_result() == first
    assert surf.interpolate_new_y(y0) == first


def test_no_extrapolation(surf):
    # The end-interval cubic is finite just past the grid, but is not used
    assert np.isfinite(scipy_bicubic(X[-1] + 0.1, y0, X, Y, V)[0])
    assert np.all(np.isnan(surf.interpolate(X[-1] + 0.1, y0)))
    assert np.all(np.isnan(surf.interpolate(x0, Y[0] - 1.0)))


def test_grid_is_borrowed():
    Xc, Yc, Vc = X.copy(), Y.copy(), V.copy()
    surf = BicubicSurface(Xc, Yc, Vc)
    assert surf.X is Xc and surf.Y is Yc and surf.V is Vc

    # Changes between queries are seen by the next interpolate
    before = surf.interpolate(x0, y0)
    Vc += 1.0
    after = surf.interpolate(x0, y0)
    assert abs(after[0] - before[0] - 1.0) < 1e-9
    assert abs(after[1] - before[1]) < 1e-9


def test_rebind():
    surf = BicubicSurface(X, Y, V)
    surf.interpolate(x0, y0)

    surf.rebind(X, Y, 2.0 * V)
    with pytest.raises(IllegalStateError):
        surf.last_value()
    v, dv, d2v = surf.interpolate(x0, y0)
    assert np.allclose((v, dv, d2v), 2.0 * np.array(expected), atol=1e-8)


def test_rebind_copy():
    Vc = V.copy()
    surf = BicubicSurface(X, Y, V)
    surf.rebind(X, Y, Vc, copy=True)
    assert surf.V is not Vc
    Vc[:] = 0.0
    assert np.allclose(surf.interpolate(x0, y0), expected, atol=1e-9)


def test_rebind_invalid_keeps_old_grid(surf):
    with pytest.raises(InvalidGridError):
        surf.rebind(X[::-1], Y, V)
    assert surf.X is X


@pytest.mark.parametrize(
    "Xb,Yb,Vb",
    [
        (X[::-1], Y, V),  # decreasing x
        (X, np.array([35.0, 50.0, 50.0, 100.0]), V),  # repeated y
        (X, Y, V.T),  # transposed values
        (X, Y, V[:-1]),  # too few rows
        (X[:3], Y, V[:3]),  # too short an axis
        (np.array([39.0, np.nan, 40.0, 41.0]), Y, V[:4]),
        (X[:, None], Y, V),  # 2D axis
    ],
)
def test_invalid_grid(Xb, Yb, Vb):
    with pytest.raises(InvalidGridError):
        BicubicSurface(Xb, Yb, Vb)


def test_lists_accepted():
    surf = BicubicSurface(X.tolist(), Y.tolist(), V.tolist())
    assert np.allclose(surf.interpolate(x0, y0), expected, atol=1e-9)


def test_from_dataarray():
    da = xr.DataArray(V.T, dims=("depth", "lat"), coords={"lat": X, "depth": Y})
    surf = BicubicSurface.from_dataarray(da, x_dim="lat", y_dim="depth")
    assert np.allclose(surf.interpolate(x0, y0), expected, atol=1e-9)

    surf = BicubicSurface.from_dataarray(da, x_dim="lat")
    assert np.allclose(surf.interpolate(x0, y0), expected, atol=1e-9)


def test_from_dataarray_errors():
    with pytest.raises(TypeError):
        BicubicSurface.from_dataarray(V)
    da = xr.DataArray(V, dims=("lat", "depth"))
    with pytest.raises(InvalidGridError):
        BicubicSurface.from_dataarray(da)
