# app/services/sale_payload.py
from __future__ import annotations

import time
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from app.core.config import settings
from app.schemas.order_service import (
    CreateSaleOrderRequest,
    PaymentInfoPayload,
    SaleOrderItemPayload,
)
from app.schemas.sales_order import OrderLineIn, SaleOrderDraftIn
from app.services.sale_pricing import money2
from app.services.sale_totals import LineBreakdown, OrderTotals, PaymentSummary
from app.services.units import GENERIC_UNIT_LABEL, TABLET, normalize_unit

PACKS = Decimal("0.0001")


def _bool_str(value: bool) -> str:
    # order service expects "true" / "false" strings for these flags
    return "true" if value else "false"


def api_quantity(breakdown: LineBreakdown) -> int:
    """
    Quantity as the order service counts it: tablets for tablet lines,
    strips for strip lines, the entered quantity otherwise.
    """
    if normalize_unit(breakdown.unit_label) == TABLET:
        return int(breakdown.amounts.actual_tablet_count)
    return breakdown.quantity


def build_sale_order_item(
    line: OrderLineIn,
    breakdown: LineBreakdown,
    *,
    today: Optional[date] = None,
) -> SaleOrderItemPayload:
    """
    One saleOrderItems entry. Computed money fields are already rounded to
    2 dp; mrp goes out exactly as entered.
    """
    today = today or date.today()
    amounts = breakdown.amounts
    is_tablet = normalize_unit(breakdown.unit_label) == TABLET

    return SaleOrderItemPayload(
        item_name=line.product_name,
        hsn_code=line.hsn or settings.DEFAULT_HSN_CODE,
        description=line.description or "Product description",
        batch_no=line.batch_no or f"BATCH-{int(time.time() * 1000)}",
        mfg=line.manufacturer or "Manufacturer",
        exp_date=line.exp_date or (today + timedelta(days=365)).isoformat(),
        mfg_date=line.mfg_date or today.isoformat(),
        mrp=float(breakdown.mrp),
        packing="S",
        quantity=api_quantity(breakdown),
        discount_type="percentage" if breakdown.discount_value > 0 else None,
        discount_value=float(breakdown.discount_value),
        tax=float(breakdown.tax_rate),
        unit_name=breakdown.unit_label or GENERIC_UNIT_LABEL,
        packaging_size=breakdown.packaging_size,
        price=float(amounts.price),
        tax_amount=float(amounts.tax_amount),
        amount_without_tax=float(amounts.amount_without_tax),
        discount_amount=float(amounts.discount_amount),
        amount_with_discount_without_tax=float(
            amounts.amount_with_discount_without_tax),
        tax_after_discount=float(amounts.tax_after_discount),
        total_payable_amount=float(amounts.total_payable_amount),
        number_of_packs=(float(
            amounts.number_of_packs.quantize(PACKS, rounding=ROUND_HALF_UP))
                         if is_tablet else None),
    )


def build_create_sale_order_request(
    draft: SaleOrderDraftIn,
    totals: OrderTotals,
    payment: PaymentSummary,
    *,
    today: Optional[date] = None,
) -> CreateSaleOrderRequest:
    items: List[SaleOrderItemPayload] = [
        build_sale_order_item(line, bd, today=today)
        for line, bd in zip(draft.lines, totals.lines)
    ]
    gst = (draft.gst_percentage if draft.gst_percentage is not None else
           settings.DEFAULT_GST_PERCENTAGE)

    return CreateSaleOrderRequest(
        customer_id=draft.customer_id,
        payment_status_id=int(draft.payment_status_id),
        payment_type_id=draft.payment_type_id,
        link_payment=_bool_str(payment.link_payment),
        deductible_wallet_amount=float(payment.wallet_used),
        paid_amount=float(payment.paid_amount),
        place_of_supply=draft.place_of_supply,
        order_status=draft.order_status,
        extra_discount=_bool_str(draft.extra_discount),
        upgrade_subscription=draft.upgrade_subscription,
        purchase_subscription=draft.purchase_subscription,
        promo_code=draft.promo_code or None,
        payment_info=PaymentInfoPayload(
            payment_type=draft.payment_type,
            amount=float(money2(payment.remaining_payable)),
            gst_percentage=float(gst),
            total_amount=float(money2(totals.total_with_tax)),
            received_amount=float(payment.received_amount),
            status=payment.status,
        ),
        sale_order_items=items,
        checkout_type=draft.checkout_type or None,
    )


def success_message(
    draft: SaleOrderDraftIn,
    sale_order_id: Optional[int],
    wallet_used: Decimal,
) -> str:
    count = len(draft.lines)
    plural = "" if count == 1 else "s"
    promo = f" with promo code: {draft.promo_code}" if draft.promo_code else ""
    wallet = (f" (₹{money2(wallet_used)} paid from wallet)"
              if wallet_used > 0 else "")
    return (f"Successfully created sales order with {count} product{plural}"
            f"{promo}! Order ID: {sale_order_id}{wallet}")
