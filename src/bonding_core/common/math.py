from bonding_core.common.errors import ArithmeticOverflow, ArithmeticUnderflow, DivisionByZero


U128_MAX = 2 ** 128 - 1


def ensure_amount(value: int, name: str = "amount") -> int:
    """Rejects anything that is not a non-negative integer (bools included)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{name}' must be an integer, got {type(value).__name__}.")
    if value < 0:
        raise ValueError(f"'{name}' must be non-negative, got {value}.")
    return value


def checked_add(a: int, b: int, limit: int = U128_MAX) -> int:
    result = a + b
    if result > limit:
        raise ArithmeticOverflow(f"{a} + {b} overflows {limit}")
    return result


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise ArithmeticUnderflow(f"{a} - {b} underflows")
    return a - b


def checked_mul(a: int, b: int, limit: int = U128_MAX) -> int:
    result = a * b
    if result > limit:
        raise ArithmeticOverflow(f"{a} * {b} overflows {limit}")
    return result


def checked_div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZero(f"{a} / 0")
    return a // b


def checked_pow(base: int, exponent: int, limit: int = U128_MAX) -> int:
    """
    Square-and-multiply exponentiation that fails as soon as an intermediate value
    exceeds 'limit', so a huge exponent never builds a huge integer.
    """
    if base in (0, 1):
        return base if exponent > 0 else 1

    result = 1
    while exponent:
        if exponent & 1:
            result = checked_mul(result, base, limit)
        exponent >>= 1
        if exponent:
            base = checked_mul(base, base, limit)
    return result


def checked_shl(value: int, bits: int, limit: int = U128_MAX) -> int:
    result = value << bits
    if result > limit:
        raise ArithmeticOverflow(f"{value} << {bits} overflows {limit}")
    return result
