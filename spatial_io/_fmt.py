"""Number and coordinate formatting."""

import math
from typing import TextIO


__docformat__ = "google"
__all__ = (
    "NumberFormat",
    "write_coords",
)


class NumberFormat:
    """
    Fixed-precision rendering of coordinate values.

    Numbers are always written with ``.`` as decimal separator and without digit grouping,
    regardless of the current locale. Rounding is half-to-even on the exact binary value
    of the float. With six fraction digits, no binary double lies exactly halfway between
    two candidates, so this is the same as rounding to the nearest decimal.

    Instances only hold immutable settings. Writers create one per call.

    Args:
        fraction_digits: the number of digits after the decimal point
        trim: strip trailing zeros (and then a trailing ``.``)
    """

    __slots__ = (
        "_spec",
        "_trim",
    )

    def __init__(self, fraction_digits: int = 6, trim: bool = False) -> None:
        if fraction_digits < 0:
            msg = "'fraction_digits' must be >= 0"
            raise ValueError(msg)

        self._spec = f".{fraction_digits}f"
        self._trim = trim

    def format(self, value: float) -> str:
        """Render a single value."""
        if not math.isfinite(value):
            msg = f"cannot format non-finite value {value!r}"
            raise ValueError(msg)

        text = format(value, self._spec)

        if self._trim and "." in text:
            text = text.rstrip("0").rstrip(".")

        return text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._spec!r}, trim={self._trim})"


def write_coords(output: TextIO, nf: NumberFormat, *coords: float) -> None:
    """Write ``[c1,c2,...]``."""
    output.write("[")
    output.write(",".join(nf.format(c) for c in coords))
    output.write("]")
