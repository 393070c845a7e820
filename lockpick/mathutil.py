"""Small integer helpers used across the package."""

_U64_MASK = (1 << 64) - 1


def ceil_div(a: int, b: int) -> int:
    """Return ``a / b`` rounded up to the nearest integer."""
    return -(-a // b)


def pow_u64(base: int, exp: int) -> int:
    """Raise ``base`` to ``exp`` with 64-bit unsigned wrap-around."""
    if exp < 0:
        raise ValueError(f"Exponent must be non-negative, but got: {exp}")
    return pow(base & _U64_MASK, exp, 1 << 64)


def floor_log2(value: int) -> int:
    """Return the largest ``k`` such that ``2**k <= value``."""
    if value <= 0:
        raise ValueError(f"Logarithm is defined only for positive values, but got: {value}")
    return value.bit_length() - 1


def ceil_log2(value: int) -> int:
    """Return the smallest ``k`` such that ``2**k >= value``."""
    if value <= 0:
        raise ValueError(f"Logarithm is defined only for positive values, but got: {value}")
    return (value - 1).bit_length()