"""Scalar arithmetic backends for fractal evaluation.

Each backend builds scalars that support ``+ - * /`` and comparison, and
provides a context in which that arithmetic runs at the backend's precision.
The evaluator and the input controller only ever touch scalars through these
operators, so the precision model is swappable:

    float      native double precision
    decimal    decimal.Decimal with a configurable number of digits
    mpmath     mpmath.mpf with a configurable number of decimal digits
"""

from contextlib import nullcontext
from decimal import Context, localcontext

import mpmath

DEFAULT_PRECISION = 28


class FloatBackend:
    """Native float arithmetic."""

    name = "float"

    def __init__(self, precision: int = 0):
        self.precision = precision

    def scalar(self, value):
        return float(value)

    def context(self):
        return nullcontext()

    def __repr__(self):
        return "FloatBackend()"


class DecimalBackend:
    """Arbitrary-precision decimal arithmetic.

    Values are created from strings (or ints) so that inputs like ``"1.1"``
    are exact rather than carrying binary float error.
    """

    name = "decimal"

    def __init__(self, precision: int = DEFAULT_PRECISION):
        self.precision = precision
        self._context = Context(prec=precision)

    def scalar(self, value):
        if isinstance(value, float):
            value = repr(value)
        return self._context.create_decimal(value)

    def context(self):
        return localcontext(self._context)

    def __repr__(self):
        return f"DecimalBackend(precision={self.precision})"


class MpmathBackend:
    """Arbitrary-precision binary floating point via mpmath."""

    name = "mpmath"

    def __init__(self, precision: int = DEFAULT_PRECISION):
        self.precision = precision

    def scalar(self, value):
        with self.context():
            if isinstance(value, float):
                value = repr(value)
            return mpmath.mpf(value)

    def context(self):
        return mpmath.workdps(self.precision)

    def __repr__(self):
        return f"MpmathBackend(precision={self.precision})"


BACKENDS = {
    FloatBackend.name: FloatBackend,
    DecimalBackend.name: DecimalBackend,
    MpmathBackend.name: MpmathBackend,
}


def get_backend(name: str, precision: int = DEFAULT_PRECISION):
    """Instantiate a backend by name."""
    try:
        backend_cls = BACKENDS[name]
    except KeyError:
        raise ValueError(f"Unknown precision backend: {name}") from None
    return backend_cls(precision)
