# app/services/sale_validation.py
from __future__ import annotations

from decimal import Decimal

from app.schemas.sales_order import PaymentStatus, SaleOrderDraftIn
from app.services.sale_pricing import D
from app.services.sale_totals import OrderTotals, PaymentSummary

ZERO = Decimal("0")


class SaleOrderValidationError(Exception):

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _plain(amount: Decimal) -> str:
    # 500.00 -> "500", 499.50 -> "499.5"
    d = D(amount).normalize()
    return format(d, "f")


def validate_sale_order(
    draft: SaleOrderDraftIn,
    totals: OrderTotals,
    payment: PaymentSummary,
) -> None:
    """
    Pre-submission checks. Raises on the first failing rule with the
    message shown to the cashier; never clamps silently.
    """
    if not draft.customer_id:
        raise SaleOrderValidationError("Please select a customer")

    if not draft.lines:
        raise SaleOrderValidationError(
            "Please add at least one product to the order")

    for line in draft.lines:
        if (not line.product_name or not line.quantity or line.quantity <= 0
                or not line.mrp or line.mrp <= 0):
            raise SaleOrderValidationError(
                "Please fill in all required fields: Product Name, Quantity, and MRP for all items"
            )

    if payment.link_payment:
        requested = D(draft.deductible_wallet_amount)
        if requested > payment.wallet_balance:
            raise SaleOrderValidationError(
                f"Wallet amount cannot exceed customer's wallet balance of ₹{_plain(payment.wallet_balance)}"
            )
        if requested > totals.total_with_tax:
            raise SaleOrderValidationError(
                "Wallet amount cannot exceed total payable amount")
        if requested < 0:
            raise SaleOrderValidationError("Wallet amount cannot be negative")

    if draft.payment_status_id == PaymentStatus.PARTIALLY_PAID:
        total_paid = D(draft.received_amount) + payment.wallet_used
        if total_paid <= ZERO:
            raise SaleOrderValidationError(
                "Total paid amount (wallet + received) must be greater than 0 for partially paid order"
            )
        if total_paid >= totals.total_with_tax:
            raise SaleOrderValidationError(
                "Total paid amount must be less than total amount for partially paid order"
            )
