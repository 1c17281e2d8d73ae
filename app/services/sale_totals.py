# app/services/sale_totals.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from app.core.config import settings
from app.schemas.sales_order import OrderLineIn, PaymentStatus, UnitDefinition
from app.services.sale_pricing import D, LineAmounts, compute_line_amounts
from app.services.units import resolve_unit_label

ZERO = Decimal("0")


@dataclass(frozen=True)
class LineBreakdown:
    product_name: str
    quantity: int
    mrp: Decimal
    tax_rate: Decimal
    unit_label: Optional[str]
    packaging_size: int
    discount_type: str  # "percentage" | "none"
    discount_value: Decimal
    amounts: LineAmounts


@dataclass
class OrderTotals:
    subtotal: Decimal = ZERO
    tax_amount: Decimal = ZERO
    total_with_tax: Decimal = ZERO
    discount_amount: Decimal = ZERO
    lines: List[LineBreakdown] = field(default_factory=list)


@dataclass(frozen=True)
class PaymentSummary:
    status: str
    link_payment: bool
    wallet_balance: Decimal
    wallet_used: Decimal
    remaining_payable: Decimal
    received_amount: Decimal
    paid_amount: Decimal


def effective_tax_rate(line: OrderLineIn) -> Decimal:
    if line.tax_rate is None:
        return settings.DEFAULT_TAX_RATE
    return D(line.tax_rate)


def price_line(line: OrderLineIn, unit_table: Sequence[UnitDefinition],
               index: int = 0) -> LineBreakdown:
    """Resolve the line's unit label and run the pricing engine on it."""
    quantity = line.quantity or 1
    mrp = D(line.mrp)
    tax_rate = effective_tax_rate(line)
    discount_value = D(line.sale_discount)
    packaging_size = line.packaging_size or 1
    unit_label = resolve_unit_label(line.unit_id, line.selected_unit_type,
                                    unit_table)

    amounts = compute_line_amounts(
        mrp,
        quantity,
        tax_rate,
        discount_value,
        unit_label,
        packaging_size,
    )
    return LineBreakdown(
        product_name=line.product_name or f"Product {index + 1}",
        quantity=quantity,
        mrp=mrp,
        tax_rate=tax_rate,
        unit_label=unit_label,
        packaging_size=packaging_size,
        discount_type="percentage" if discount_value > 0 else "none",
        discount_value=discount_value,
        amounts=amounts,
    )


def aggregate(lines: Iterable[OrderLineIn],
              unit_table: Sequence[UnitDefinition]) -> OrderTotals:
    """
    Sum of the per-line breakdowns. Lines are rounded individually, so the
    order total can differ by a cent from rounding the raw sum once.
    """
    totals = OrderTotals()
    for idx, line in enumerate(lines):
        bd = price_line(line, unit_table, idx)
        totals.subtotal += bd.amounts.price
        totals.tax_amount += bd.amounts.tax_after_discount
        totals.total_with_tax += bd.amounts.total_payable_amount
        totals.discount_amount += bd.amounts.discount_amount
        totals.lines.append(bd)
    return totals


def clamp_wallet_amount(requested, wallet_balance, total_with_tax) -> Decimal:
    return max(ZERO, min(D(requested), D(wallet_balance), D(total_with_tax)))


def wallet_used(total_with_tax, deductible_wallet_amount,
                link_payment: bool) -> Decimal:
    if not link_payment:
        return ZERO
    return min(D(deductible_wallet_amount), D(total_with_tax))


def reconcile_payment(
    total_with_tax,
    *,
    payment_status: PaymentStatus,
    link_payment: bool,
    deductible_wallet_amount=ZERO,
    wallet_balance=None,
    received_amount=None,
) -> PaymentSummary:
    """
    Wallet offset and received/paid amounts for the current order total.
    When the customer's balance is known it also caps the wallet deduction.
    """
    total = D(total_with_tax)
    used = wallet_used(total, deductible_wallet_amount, link_payment)
    if link_payment and wallet_balance is not None:
        used = min(used, D(wallet_balance))
    remaining = max(ZERO, total - used)

    if payment_status == PaymentStatus.PARTIALLY_PAID:
        received = D(received_amount)
    elif payment_status == PaymentStatus.UNPAID:
        received = ZERO
    else:
        received = remaining

    return PaymentSummary(
        status=payment_status.label,
        link_payment=link_payment,
        wallet_balance=D(wallet_balance),
        wallet_used=used,
        remaining_payable=remaining,
        received_amount=received,
        paid_amount=received,
    )
