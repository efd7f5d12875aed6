"""Byte-count formatting in decimal (K/M/G/T) and binary (Ki/Mi/Gi/Ti) units."""

from __future__ import annotations

import math
import sys
from decimal import ROUND_HALF_UP, Decimal, localcontext

ONE_MB_IN_B = 1000000
TEN_MB_IN_B = 10000000
ONE_GB_IN_B = 1000000000
TEN_GB_IN_B = 10000000000
ONE_TB_IN_B = 1000000000000
TEN_TB_IN_B = 10000000000000

ONE_KIB_IN_B = 1024
ONE_MIB_IN_B = 1048576
TEN_MIB_IN_B = 10485760
ONE_GIB_IN_B = 1073741824
TEN_GIB_IN_B = 10737418240
ONE_TIB_IN_B = 1099511627776
TEN_TIB_IN_B = 10995116277760

# Chart maxima are not halved below this value
ROUND_MAX_FLOOR = 20000

# Larger floats are scaled to bits as integers to stay finite
_MAX_FLOAT_BITS = sys.float_info.max / 8

# (upper bound, divisor, prefix, keeps fractional digit)
_DECIMAL_TIERS: tuple[tuple[float, int, str, bool], ...] = (
    (ONE_MB_IN_B, 1000, "K", False),
    (TEN_MB_IN_B, ONE_MB_IN_B, "M", True),
    (ONE_GB_IN_B, ONE_MB_IN_B, "M", False),
    (TEN_GB_IN_B, ONE_GB_IN_B, "G", True),
    (ONE_TB_IN_B, ONE_GB_IN_B, "G", False),
    (TEN_TB_IN_B, ONE_TB_IN_B, "T", True),
    (math.inf, ONE_TB_IN_B, "T", False),
)

_BINARY_TIERS: tuple[tuple[float, int, str, bool], ...] = (
    (ONE_MIB_IN_B, ONE_KIB_IN_B, "Ki", False),
    (TEN_MIB_IN_B, ONE_MIB_IN_B, "Mi", True),
    (ONE_GIB_IN_B, ONE_MIB_IN_B, "Mi", False),
    (TEN_GIB_IN_B, ONE_GIB_IN_B, "Gi", True),
    (ONE_TIB_IN_B, ONE_GIB_IN_B, "Gi", False),
    (TEN_TIB_IN_B, ONE_TIB_IN_B, "Ti", True),
    (math.inf, ONE_TIB_IN_B, "Ti", False),
)


class DomainError(ValueError):
    """Raised for negative or non-finite quantities."""


def _out_of_domain(quantity: float) -> bool:
    if isinstance(quantity, int):
        return quantity < 0
    return math.isnan(quantity) or math.isinf(quantity) or quantity < 0


def _to_fixed(value: float, places: int) -> str:
    """Round half away from zero to a fixed number of decimal places."""
    exact = Decimal(value)
    exponent = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        return format(exact.quantize(exponent, rounding=ROUND_HALF_UP), "f")


def _scale(quantity: float, divisor: int, places: int) -> str:
    try:
        return _to_fixed(quantity / divisor, places)
    except OverflowError:
        # Integers past the float range; only the unbounded whole-number tier reaches here
        return str((quantity + divisor // 2) // divisor)


def _format(
    quantity: float,
    unit: str,
    imprecise: bool,
    tiers: tuple[tuple[float, int, str, bool], ...],
) -> str:
    if _out_of_domain(quantity):
        raise DomainError(f"Cannot format byte quantity {quantity!r}")

    precision = 0 if imprecise else 1
    suffix = "B"
    if unit == "bits":
        if isinstance(quantity, float) and quantity > _MAX_FLOAT_BITS:
            quantity = int(quantity)
        quantity *= 8
        suffix = "b"

    if quantity < 1:
        return f"0 K{suffix}"
    if quantity < 1000:
        # Show activity without cluttering the display with raw byte counts
        return f"< 1 K{suffix}"

    for upper, divisor, prefix, fractional in tiers:
        if quantity < upper:
            places = precision if fractional else 0
            return f"{_scale(quantity, divisor, places)} {prefix}{suffix}"
    raise AssertionError("unreachable: last tier is unbounded")


def bytes_to_human_string(num_bytes: float, unit: str = "bytes", imprecise: bool = False) -> str:
    """Convert a number of bytes to a short decimal-unit string.

    Values under 10 of a unit keep one fractional digit ("3.4 MB"), larger
    values are shown as whole numbers ("34 MB", "340 MB").

    Args:
        num_bytes: Number of bytes, must be finite and >= 0
        unit: ``"bytes"`` or ``"bits"`` (multiplies by 8, suffix ``b``)
        imprecise: Drop the fractional digit entirely

    Raises:
        DomainError: If ``num_bytes`` is negative, NaN or infinite
    """
    return _format(num_bytes, unit, imprecise, _DECIMAL_TIERS)


def binary_bytes_to_human_string(num_bytes: float, unit: str = "bytes", imprecise: bool = False) -> str:
    """Same as :func:`bytes_to_human_string` but with 1024-based units."""
    return _format(num_bytes, unit, imprecise, _BINARY_TIERS)


def gbytes_to_human_string(gb: float) -> str:
    return bytes_to_human_string(gb * ONE_GB_IN_B)


def round_max(num_bytes: float) -> float:
    """Round up to the nearest power of 10, then halve while still above ``num_bytes``.

    Produces a chart maximum that is never more than twice the input, except
    below ``ROUND_MAX_FLOOR`` where halving stops.
    """
    if _out_of_domain(num_bytes) or num_bytes == 0:
        raise DomainError(f"Cannot compute a chart maximum for {num_bytes!r}")

    try:
        result = float(10 ** math.ceil(math.log10(num_bytes)))
    except OverflowError as e:
        raise DomainError(f"Chart maximum for {num_bytes!r} exceeds the float range") from e
    while result / 2 > num_bytes and result > ROUND_MAX_FLOOR:
        result /= 2
    return result
