# catering/estimates/pricing.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence, Union

from catering.schemas.invoice import LineItem

D = Decimal

Percent = Union[Decimal, int, float, str]


def round_cents(x: Decimal) -> int:
    return int(x.quantize(D("1"), rounding=ROUND_HALF_UP))


def calc_tax(subtotal: int, tax_rate: Percent, is_government: bool) -> int:
    """Tax in cents. tax_rate is a percentage (8.5 means 8.5%)."""
    if is_government:
        return 0
    return round_cents(D(subtotal) * D(str(tax_rate)) / D("100"))


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: int
    tax_amount: int
    total: int


@dataclass(frozen=True)
class PricingResult:
    line_items: List[LineItem]
    subtotal: int
    tax_amount: int
    total: int


def calculate_totals(
    line_items: Sequence[LineItem],
    tax_rate: Percent,
    is_government: bool,
) -> InvoiceTotals:
    subtotal = sum(item.total_price for item in line_items)
    tax_amount = calc_tax(subtotal, tax_rate, is_government)
    return InvoiceTotals(subtotal=subtotal, tax_amount=tax_amount, total=subtotal + tax_amount)


def apply_flat_rate(
    line_items: Sequence[LineItem],
    per_guest_rate: int,
    guest_count: int,
    tax_rate: Percent,
    is_government: bool,
) -> PricingResult:
    """
    Spread per_guest_rate * guest_count evenly over the unit prices.

    Leftover cents go to the first items, one each, so reruns with the same
    input always price the same way. Inputs are not mutated.
    """
    n = len(line_items)
    if n == 0:
        return PricingResult(line_items=list(line_items), subtotal=0, tax_amount=0, total=0)

    target_total = int(per_guest_rate) * int(guest_count)
    base, remainder = divmod(target_total, n)

    priced: List[LineItem] = []
    for i, item in enumerate(line_items):
        unit_price = base + (1 if i < remainder else 0)
        priced.append(
            item.model_copy(
                update={"unit_price": unit_price, "total_price": unit_price * item.quantity}
            )
        )

    totals = calculate_totals(priced, tax_rate, is_government)
    return PricingResult(
        line_items=priced,
        subtotal=totals.subtotal,
        tax_amount=totals.tax_amount,
        total=totals.total,
    )


def reprice_item(item: LineItem, *, unit_price: int | None = None, quantity: int | None = None) -> LineItem:
    """Manual edit: new unit price and/or quantity, total recomputed."""
    up = item.unit_price if unit_price is None else unit_price
    qty = item.quantity if quantity is None else quantity
    return item.model_copy(update={"unit_price": up, "quantity": qty, "total_price": up * qty})
