"""Visit pricing rules."""
from __future__ import annotations


def visit_subtotal(
    price_fardo: float | None,
    price_botellon: float | None,
    qty_fardo: int,
    qty_botellon: int,
) -> float:
    """
    Return qty_fardo*price_fardo + qty_botellon*price_botellon.

    Missing prices count as 0. Negative values are not rejected here.
    """
    return qty_fardo * float(price_fardo or 0) + qty_botellon * float(price_botellon or 0)
