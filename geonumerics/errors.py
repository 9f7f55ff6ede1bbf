"""
Exceptions raised by the root finders, extremum finders and interpolators.

Each error may be built with a message, a wrapped cause, both, or neither.
When a cause is given it becomes the exception's `__cause__`, exactly as if it
had been raised with `raise ... from cause`.
"""


class GeoNumericsError(Exception):
    """Base class for all errors raised by `geonumerics`."""

    def __init__(self, message=None, cause=None):
        if message is None and cause is not None:
            message = str(cause)
        if message is None:
            super().__init__()
        else:
            super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class InvalidGridError(GeoNumericsError, ValueError):
    """Grid axes are not strictly increasing, or the values do not fit them."""


class BracketError(GeoNumericsError, ValueError):
    """A caller-supplied bracket does not satisfy its precondition."""


class ConvergenceError(GeoNumericsError, RuntimeError):
    """The iteration limit was reached before the tolerance was met."""

    def __init__(self, message=None, cause=None, maxiter=None):
        super().__init__(message, cause)
        self.maxiter = maxiter


class EvaluationError(GeoNumericsError, ArithmeticError):
    """A user-supplied function is undefined at the requested abscissa."""


class IllegalStateError(GeoNumericsError, RuntimeError):
    """An operation was requested before the state it relies on exists."""
