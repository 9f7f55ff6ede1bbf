"""
Limits of the hardware floating point representation.

The radix and machine epsilon are measured, not read from compiled-in
constants, and are computed only once per process. The convergence tolerances
of `geonumerics.fzero` and `geonumerics.fmin` derive from them.
"""

import functools
import math
from collections import namedtuple


MachineConstants = namedtuple(
    "MachineConstants", ["radix", "machine_epsilon", "default_precision"]
)
MachineConstants.__doc__ = """Floating point limits of the running machine.

radix : int
    Base of the floating point representation, at least 2.
machine_epsilon : float
    Smallest power of `radix` which, added to 1.0, gives a result other than 1.0.
default_precision : float
    `sqrt(machine_epsilon)`, a typical meaningful precision for iterative
    numerical calculations.
"""


def _compute_radix():
    # Grow `a` until adding 1 to it is lost to round-off.
    a = 1.0
    while True:
        a += a
        if ((a + 1.0) - a) - 1.0 != 0.0:
            break

    # The smallest increment that survives being added to `a` is the radix.
    b = 1.0
    r = 0
    while r == 0:
        r = int((a + b) - a)
        b += 1.0
    return r


def _compute_machine_epsilon(radix):
    inv_radix = 1.0 / radix
    eps = 1.0
    while 1.0 + eps * inv_radix != 1.0:
        eps *= inv_radix
    return eps


@functools.lru_cache(maxsize=None)
def machine_constants():
    """
    Measure the floating point radix and machine epsilon.

    Returns
    -------
    MachineConstants
        Immutable record of `radix`, `machine_epsilon` and `default_precision`.

    Notes
    -----
    The result is cached, so the measurement runs once per process. Concurrent
    first calls may each run the measurement, which is deterministic, so all
    callers see identical values.
    """
    r = _compute_radix()
    eps = _compute_machine_epsilon(r)
    return MachineConstants(r, eps, math.sqrt(eps))


def radix():
    """Radix used by floating point numbers."""
    return machine_constants().radix


def machine_epsilon():
    """Smallest `eps` for which `1.0 + eps != 1.0`."""
    return machine_constants().machine_epsilon


def default_precision():
    """Typical meaningful precision for numerical calculations."""
    return machine_constants().default_precision


def approx_equal(a, b, precision=None):
    """
    Test whether two numbers agree to a relative precision

    Parameters
    ----------
    a, b : float
        Numbers to compare.
    precision : float, Default `default_precision()`
        Relative precision of the comparison.

    Returns
    -------
    bool
        True if both `a` and `b` are smaller in magnitude than `precision`, or
        if `|a - b| < precision * max(|a|, |b|)`.
    """
    if precision is None:
        precision = default_precision()
    norm = max(abs(a), abs(b))
    return norm < precision or abs(a - b) < precision * norm
