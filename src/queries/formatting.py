"""Display helpers for the dashboard (currency, dates, counts)."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union


def _group_indian(digits: str) -> str:
    """Indian digit grouping: last three digits, then pairs (1,00,000)."""
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)

    return ",".join(groups + [tail])


def format_currency(amount: Union[Decimal, int, float], symbol: str = "₹") -> str:
    """
    Format an amount as whole rupees, e.g. ₹1,00,000 or -₹2,700.
    """
    value = Decimal(str(amount))
    with localcontext() as ctx:
        # quantize needs a digit of precision for every whole-unit digit
        ctx.prec = max(ctx.prec, value.adjusted() + 2)
        value = value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        digits = str(abs(value))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{_group_indian(digits)}"


def format_date(d: date) -> str:
    """e.g. 5 Jan 2024"""
    return f"{d.day} {d.strftime('%b %Y')}"


def transaction_count_label(total: int, shown: int) -> str:
    """'3 transactions', '1 transaction' or '2 of 5 transactions'."""
    noun = "transaction" if total == 1 else "transactions"
    if total == shown:
        return f"{total} {noun}"
    return f"{shown} of {total} {noun}"
