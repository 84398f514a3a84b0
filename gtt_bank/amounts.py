"""
Amount Parsing Module

Turns free-form user text into Decimal amounts, renders amounts for
display, and does balance arithmetic. NEVER uses float for monetary values.

Arithmetic runs in a local decimal context sized to its operands, so
amounts have no upper bound and sums are never silently rounded. The only
limit is MAX_DIGITS significant digits, which keeps exponent input such
as "1e999999999" from allocating unbounded memory.
"""

from decimal import (
    Context, Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow,
    ROUND_HALF_UP, localcontext
)
from typing import Optional, Union
import re


MAX_DIGITS = 100_000  # Significant digits any single value may need
MIN_PRECISION = 28

_AMOUNT_PATTERN = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')
_THOUSANDS_PATTERN = re.compile(r'[+-]?\d{1,3}(,\d{3})+(\.\d*)?')


def _sized_context(digits: int, exact: bool = False):
    """Local decimal context with room for `digits` significant digits"""
    if digits > MAX_DIGITS:
        raise ValueError(f"Amount needs more than {MAX_DIGITS} digits")
    traps = [InvalidOperation, DivisionByZero, Overflow]
    if exact:
        traps.append(Inexact)
    return localcontext(Context(
        prec=max(digits, MIN_PRECISION), rounding=ROUND_HALF_UP, traps=traps
    ))


def _span(*values: Decimal) -> int:
    """Digits needed to hold a sum or difference of values exactly"""
    top = max(v.adjusted() for v in values) + 2  # One spare for carry
    bottom = min(v.as_tuple().exponent for v in values)
    return top - bottom


def quantize_amount(value: Decimal, precision: int = 2) -> Decimal:
    """Round a Decimal half-up to the given number of places"""
    with _sized_context(max(value.adjusted(), 0) + precision + 2):
        return value.quantize(Decimal('0.1') ** precision, rounding=ROUND_HALF_UP)


def exact_add(a: Decimal, b: Decimal) -> Decimal:
    """a + b with no rounding"""
    try:
        with _sized_context(_span(a, b), exact=True):
            return a + b
    except Inexact:
        raise ValueError("Sum cannot be represented exactly")


def exact_subtract(a: Decimal, b: Decimal) -> Decimal:
    """a - b with no rounding"""
    try:
        with _sized_context(_span(a, b), exact=True):
            return a - b
    except Inexact:
        raise ValueError("Difference cannot be represented exactly")


def parse_amount(
    value: str,
    precision: int = 2,
    currency_symbol: Optional[str] = None
) -> Decimal:
    """
    Convert user-entered text to a Decimal amount

    Args:
        value: Text as typed by the user, e.g. "100", " 1,250.50 ", "₹20"
        precision: Number of decimal places to round to
        currency_symbol: Symbol allowed as a prefix and stripped

    Returns:
        Decimal rounded to precision. The sign is preserved; positivity
        is checked by the ledger, not here.

    Raises:
        ValueError: If the text is not a number
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    clean_value = value.strip()
    if currency_symbol and clean_value.startswith(currency_symbol):
        clean_value = clean_value[len(currency_symbol):].strip()

    # Comma is only accepted as a thousands separator
    if _THOUSANDS_PATTERN.fullmatch(clean_value):
        clean_value = clean_value.replace(',', '')

    if not _AMOUNT_PATTERN.fullmatch(clean_value):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    return quantize_amount(Decimal(clean_value), precision)


def format_amount(
    amount: Union[Decimal, int],
    currency_symbol: str = "",
    precision: int = 2
) -> str:
    """Format for display, e.g. ₹1,250.50"""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return f"{currency_symbol}{amount:,.{precision}f}"
