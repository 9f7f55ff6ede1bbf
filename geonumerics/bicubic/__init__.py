"""
Natural bicubic spline interpolation on a 2D grid.

The `BicubicSurface` class interpolates values tabulated on a rectilinear
grid, returning the value and its first and second derivatives with respect
to x. After one full `interpolate(x, y)`, `interpolate_new_y` and
`interpolate_new_x` re-evaluate at a new y or x without repeating the work
that does not depend on the changed coordinate.

The one-dimensional natural cubic spline kernels it is built on are
`numba.njit`'ed and can be used directly from `geonumerics.bicubic.spline`.
"""

import importlib as _importlib
from .spline import (
    natural_spline_coeffs,
    spline_interval,
    spline_val,
    spline_val_deriv,
)
from .surface import BicubicSurface

modules = ["spline", "surface"]

__all__ = modules + [
    k for (k, v) in locals().items() if callable(v) and not k.startswith("_")
]  # all local, public functions


def __dir__():
    return __all__


# Lazy load of submodules
def __getattr__(name):
    if name in modules:
        return _importlib.import_module(f"geonumerics.bicubic.{name}")
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'geonumerics.bicubic' has no attribute '{name}'"
            )
