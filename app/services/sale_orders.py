# app/services/sale_orders.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Tuple

from app.core.config import settings
from app.schemas.order_service import CreateSaleOrderRequest, SaleOrderOut
from app.schemas.sales_order import (
    OrderLineIn,
    PaymentStatus,
    SaleOrderDraftIn,
    UnitDefinition,
)
from app.services.order_service_client import OrderServiceClient
from app.services.sale_payload import (
    build_create_sale_order_request,
    success_message,
)
from app.services.sale_pricing import D
from app.services.sale_totals import (
    OrderTotals,
    PaymentSummary,
    aggregate,
    reconcile_payment,
)
from app.services.sale_validation import validate_sale_order
from app.services.units import match_unit_label

logger = logging.getLogger(__name__)


@dataclass
class PreparedSaleOrder:
    draft: SaleOrderDraftIn
    units: List[UnitDefinition]
    totals: OrderTotals
    payment: PaymentSummary


@dataclass
class SubmittedSaleOrder:
    prepared: PreparedSaleOrder
    request: CreateSaleOrderRequest
    order: SaleOrderOut
    message: str


def _wallet_balance(draft: SaleOrderDraftIn,
                    client: OrderServiceClient) -> Decimal:
    if draft.wallet_balance is not None:
        return D(draft.wallet_balance)
    if not draft.customer_id:
        return Decimal("0")
    customer = client.get_customer(draft.customer_id)
    return D(customer.wallet_amt)


def prepare_sale_order(draft: SaleOrderDraftIn,
                       client: OrderServiceClient) -> PreparedSaleOrder:
    """
    Resolve reference data (units, wallet balance) and recompute the whole
    breakdown from scratch. Upstream is only hit for what the draft omits.
    """
    units = draft.units if draft.units is not None else client.list_units()
    balance = _wallet_balance(draft, client)

    link_payment = (draft.link_payment
                    if draft.link_payment is not None else balance > 0)

    totals = aggregate(draft.lines, units)
    payment = reconcile_payment(
        totals.total_with_tax,
        payment_status=draft.payment_status_id,
        link_payment=link_payment,
        deductible_wallet_amount=draft.deductible_wallet_amount,
        wallet_balance=balance,
        received_amount=draft.received_amount,
    )
    return PreparedSaleOrder(draft=draft,
                             units=units,
                             totals=totals,
                             payment=payment)


def build_sale_order_request(
        draft: SaleOrderDraftIn,
        client: OrderServiceClient) -> Tuple[PreparedSaleOrder, CreateSaleOrderRequest]:
    prepared = prepare_sale_order(draft, client)
    validate_sale_order(draft, prepared.totals, prepared.payment)
    request = build_create_sale_order_request(draft, prepared.totals,
                                              prepared.payment)
    return prepared, request


def submit_sale_order(draft: SaleOrderDraftIn,
                      client: OrderServiceClient) -> SubmittedSaleOrder:
    prepared, request = build_sale_order_request(draft, client)
    order = client.create_sale_order(request)
    message = success_message(draft, order.sale_order_id,
                              prepared.payment.wallet_used)
    logger.info("Sale order %s created for customer %s", order.sale_order_id,
                draft.customer_id)
    return SubmittedSaleOrder(prepared=prepared,
                              request=request,
                              order=order,
                              message=message)


# ---------- Repeat order ----------


def draft_from_sale_order(order: SaleOrderOut,
                          units: List[UnitDefinition]) -> SaleOrderDraftIn:
    """
    Rebuild an editable draft from a stored order. Unit ids are recovered
    by matching each item's unit name against the unit table.
    """
    lines: List[OrderLineIn] = []
    for it in order.sale_order_items:
        unit, selector = match_unit_label(it.unit_name, units)
        lines.append(
            OrderLineIn(
                product_name=it.item_name or "",
                description=it.description or "",
                hsn=str(it.hsn_code) if it.hsn_code else settings.DEFAULT_HSN_CODE,
                batch_no=it.batch_no or "",
                manufacturer=it.mfg or "",
                mfg_date=it.mfg_date or "",
                exp_date=it.exp_date or "",
                mrp=it.mrp or it.price_per_unit or Decimal("0"),
                quantity=it.quantity or 1,
                tax_rate=(it.tax if it.tax is not None else
                          settings.DEFAULT_TAX_RATE),
                sale_discount=it.discount_value or Decimal("0"),
                unit_id=unit.unit_id if unit else None,
                selected_unit_type=selector,
                packaging_size=it.packaging_size or 1,
            ))

    link = order.link_payment
    if isinstance(link, str):
        link = link.lower() == "true"

    status = PaymentStatus.PAID
    if order.payment_status_id in {s.value for s in PaymentStatus}:
        status = PaymentStatus(order.payment_status_id)

    return SaleOrderDraftIn(
        customer_id=order.customer_id,
        units=units,
        payment_status_id=status,
        payment_type_id=order.payment_type_id or 1,
        link_payment=bool(link),
        deductible_wallet_amount=order.deductible_wallet_amount or Decimal("0"),
        received_amount=(order.paid_amount if status
                         == PaymentStatus.PARTIALLY_PAID else None),
        order_status=order.order_status or "Paid",
        lines=lines,
    )
