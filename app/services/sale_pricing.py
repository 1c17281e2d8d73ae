# app/services/sale_pricing.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from app.services.units import STRIP, TABLET, is_pack_priced, normalize_unit

MONEY = Decimal("0.01")
HUNDRED = Decimal("100")


def D(x) -> Decimal:
    try:
        return Decimal(str(x or 0))
    except Exception:
        return Decimal("0")


def money2(x) -> Decimal:
    # ROUND_HALF_UP on Decimal rounds half away from zero
    return D(x).quantize(MONEY, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LineAmounts:
    price: Decimal
    tax_amount: Decimal
    amount_without_tax: Decimal
    discount_amount: Decimal
    amount_with_discount_without_tax: Decimal
    tax_after_discount: Decimal
    total_payable_amount: Decimal
    actual_tablet_count: Decimal
    number_of_packs: Decimal


def compute_line_amounts(
    mrp,
    quantity,
    tax_rate,
    discount_percent,
    unit_label: Optional[str],
    packaging_size=1,
) -> LineAmounts:
    """
    Price one order line from a tax-inclusive MRP.

    Tablet lines convert the tablet count to (fractional) strips, strip
    lines expand to tablets; MRP is always per strip for both. Any other
    label is priced 1:1 per unit.

    Order matters and every money step is rounded to 2 dp on its own:
      1. back out tax from the MRP total
      2. discount the tax-exclusive amount
      3. re-apply tax on the discounted base
      4. payable = discounted base + new tax
    Nothing is validated here; only the packaging-size division is guarded.
    """
    mrp = D(mrp)
    quantity = D(quantity)
    tax_rate = D(tax_rate)
    discount_percent = D(discount_percent)
    packaging_size = D(packaging_size)

    unit = normalize_unit(unit_label)
    if unit == TABLET:
        actual_tablet_count = quantity
        number_of_packs = (quantity / packaging_size
                           if packaging_size > 0 else quantity)
    elif unit == STRIP:
        actual_tablet_count = quantity * packaging_size
        number_of_packs = quantity
    else:
        actual_tablet_count = quantity
        number_of_packs = quantity

    if is_pack_priced(unit):
        price = number_of_packs * mrp
    else:
        price = quantity * mrp

    tax_amount = money2(price * tax_rate / (HUNDRED + tax_rate))
    amount_without_tax = money2(price - tax_amount)

    discount_amount = (money2(amount_without_tax * discount_percent / HUNDRED)
                       if discount_percent > 0 else Decimal("0.00"))
    amount_with_discount_without_tax = money2(amount_without_tax -
                                              discount_amount)

    tax_after_discount = money2(amount_with_discount_without_tax *
                                (tax_rate / HUNDRED))
    total_payable_amount = money2(amount_with_discount_without_tax +
                                  tax_after_discount)

    return LineAmounts(
        price=money2(price),
        tax_amount=tax_amount,
        amount_without_tax=amount_without_tax,
        discount_amount=discount_amount,
        amount_with_discount_without_tax=amount_with_discount_without_tax,
        tax_after_discount=tax_after_discount,
        total_payable_amount=total_payable_amount,
        actual_tablet_count=actual_tablet_count,
        number_of_packs=number_of_packs,
    )
