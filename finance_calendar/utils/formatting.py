"""Turkish locale amount formatting"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from typing import Union

CURRENCY_SYMBOL = "₺"
THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","
MAX_FRACTION_DIGITS = 3


def format_amount(amount: Union[int, float, Decimal]) -> str:
    """
    Format a number the way tr-TR renders it.

    Examples:
        250       → "250"
        1234567.5 → "1.234.567,5"
        0.12345   → "0,123"
    """
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return str(amount)
    if not value.is_finite():
        return str(amount)

    with localcontext() as ctx:
        # Enough digits for the integer part plus the kept fraction
        ctx.prec = max(ctx.prec, value.adjusted() + MAX_FRACTION_DIGITS + 2)
        value = value.quantize(Decimal(1).scaleb(-MAX_FRACTION_DIGITS), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer_part, _, fraction_part = f"{value.copy_abs():f}".partition(".")
    fraction_part = fraction_part.rstrip("0")

    groups = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)

    formatted = THOUSANDS_SEPARATOR.join(groups)
    if fraction_part:
        formatted += DECIMAL_SEPARATOR + fraction_part
    if formatted == "0":
        sign = ""
    return sign + formatted


def format_try(amount: Union[int, float, Decimal]) -> str:
    """Amount prefixed with the lira symbol, e.g. "₺1.250" """
    return f"{CURRENCY_SYMBOL}{format_amount(amount)}"
