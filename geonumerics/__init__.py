__version__ = "1.0.0"

import importlib as _importlib

# Import from subpackages
from .bicubic import BicubicSurface

# Import from modules
from .errors import *
from .function import ScalarFunction
from .fmin import minimize, maximize
from .fzero import brent, find_root
from .machine import (
    MachineConstants,
    approx_equal,
    default_precision,
    machine_constants,
    machine_epsilon,
    radix,
)

# List of modules not explicitly imported above
modules = ["errors", "fmin", "function", "fzero", "machine"]

__all__ = modules + [
    k for (k, v) in locals().items() if not k.startswith("_")
]  # all local, public functions


def __dir__():
    return __all__


# Lazy load of modules.
def __getattr__(name):
    if name in modules:
        return _importlib.import_module(f"geonumerics.{name}")
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(f"Module 'geonumerics' has no attribute '{name}'")
