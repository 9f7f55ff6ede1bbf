"""
The scalar function capability consumed by the root and extremum finders.
"""

import abc


class ScalarFunction(abc.ABC):
    """
    A function of a single real variable.

    Subclasses implement `evaluate`. The solvers may evaluate the function at
    abscissas in any order, possibly repeating some, and assume only that
    repeated calls at the same `x` return the same value.

    Instances are callable, so a `ScalarFunction` can be used anywhere a plain
    function of one variable is expected.
    """

    @abc.abstractmethod
    def evaluate(self, x):
        """
        Evaluate the function at `x`.

        Raises
        ------
        EvaluationError
            If the function is undefined at `x`.
        """

    def __call__(self, x):
        return self.evaluate(x)


def as_callable(f, args=()):
    """
    Resolve `f` to a plain function of one variable

    Parameters
    ----------
    f : ScalarFunction, object with an `evaluate` method, or callable
        The function to wrap.
    args : tuple
        Additional arguments, beyond the abscissa, to be passed to `f`.
        Must be `()` unless `f` is a plain callable.

    Returns
    -------
    function
        A function `g` such that `g(x)` evaluates `f` at `x`.
    """
    evaluate = getattr(f, "evaluate", None)
    if callable(evaluate):
        if args:
            raise TypeError("Extra `args` are not accepted with a ScalarFunction.")
        return evaluate

    if not callable(f):
        raise TypeError(
            f"Expected a ScalarFunction or a callable; got {type(f).__name__}"
        )

    if args:
        return lambda x: f(x, *args)
    return f
