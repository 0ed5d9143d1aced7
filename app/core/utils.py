from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext

getcontext().prec = 28
CENTS = Decimal("0.01")
ZERO = Decimal("0")


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value) -> Decimal:
    """
    Converts ints, floats, strings and DB numerics to Decimal without
    picking up binary float noise (0.1 -> Decimal("0.1")).
    """
    if isinstance(value, Decimal):
        d = value
    else:
        try:
            d = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}")

    if not d.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")

    return d
