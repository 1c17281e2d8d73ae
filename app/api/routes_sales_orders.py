from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_order_service_client
from app.api.response import ok
from app.schemas.sales_order import (
    OrderTotalsOut,
    PaymentSummaryOut,
    SaleOrderCreatedOut,
    SaleOrderDraftIn,
    SaleOrderQuoteOut,
    UpiQrIn,
    WalletClampIn,
)
from app.services.api_errors import OrderServiceError
from app.services.error_logger import format_exception, log_error
from app.services.order_service_client import OrderServiceClient
from app.services.sale_orders import (
    PreparedSaleOrder,
    build_sale_order_request,
    draft_from_sale_order,
    prepare_sale_order,
    submit_sale_order,
)
from app.services.sale_totals import clamp_wallet_amount

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sales/orders", tags=["Sales Orders"])


def _quote_out(prepared: PreparedSaleOrder) -> SaleOrderQuoteOut:
    return SaleOrderQuoteOut(
        totals=OrderTotalsOut.model_validate(prepared.totals),
        payment=PaymentSummaryOut.model_validate(prepared.payment),
    )


def _record_upstream_failure(
    db: Session,
    request: Request,
    exc: OrderServiceError,
    *,
    customer_id=None,
    request_payload=None,
) -> None:
    logger.warning("Upstream failure on %s %s: %s", request.method,
                   request.url.path, exc.message)
    log_error(
        db,
        description=exc.message,
        error_source="upstream",
        endpoint=f"{request.method} {request.url.path}",
        http_status=exc.status_code,
        customer_id=customer_id,
        request_payload=request_payload,
        response_payload=exc.payload,
        stack_trace=format_exception(exc),
    )


@router.post("/quote")
def quote_sale_order(
        body: SaleOrderDraftIn,
        request: Request,
        db: Session = Depends(get_db),
        client: OrderServiceClient = Depends(get_order_service_client),
):
    try:
        prepared = prepare_sale_order(body, client)
    except OrderServiceError as e:
        _record_upstream_failure(db, request, e, customer_id=body.customer_id)
        raise
    return ok(_quote_out(prepared))


@router.post("/wallet/clamp")
def clamp_wallet(body: WalletClampIn):
    amount = clamp_wallet_amount(body.requested_amount, body.wallet_balance,
                                 body.total_with_tax)
    return ok({"deductibleWalletAmount": amount})


@router.post("/payload")
def preview_sale_order_payload(
        body: SaleOrderDraftIn,
        request: Request,
        db: Session = Depends(get_db),
        client: OrderServiceClient = Depends(get_order_service_client),
):
    try:
        _, order_request = build_sale_order_request(body, client)
    except OrderServiceError as e:
        _record_upstream_failure(db, request, e, customer_id=body.customer_id)
        raise
    return ok(order_request.to_wire())


@router.post("")
def create_sale_order(
        body: SaleOrderDraftIn,
        request: Request,
        db: Session = Depends(get_db),
        client: OrderServiceClient = Depends(get_order_service_client),
):
    try:
        submitted = submit_sale_order(body, client)
    except OrderServiceError as e:
        _record_upstream_failure(
            db,
            request,
            e,
            customer_id=body.customer_id,
            request_payload=body.model_dump(mode="json", by_alias=True),
        )
        raise

    out = SaleOrderCreatedOut(
        sale_order_id=submitted.order.sale_order_id,
        sale_order_invoice_no=submitted.order.sale_order_invoice_no,
        message=submitted.message,
        quote=_quote_out(submitted.prepared),
    )
    return ok(out, status_code=201)


@router.get("/{sale_order_id}/repeat")
def repeat_sale_order(
        request: Request,
        sale_order_id: int = Path(..., gt=0),
        db: Session = Depends(get_db),
        client: OrderServiceClient = Depends(get_order_service_client),
):
    try:
        order = client.get_sale_order(sale_order_id)
        units = client.list_units()
    except OrderServiceError as e:
        _record_upstream_failure(db, request, e)
        raise
    draft = draft_from_sale_order(order, units)
    return ok(draft, meta={"repeatFrom": sale_order_id})


@router.post("/upi-qr")
def upi_qr_code(
        body: UpiQrIn,
        request: Request,
        db: Session = Depends(get_db),
        client: OrderServiceClient = Depends(get_order_service_client),
):
    try:
        qr = client.generate_upi_qr(
            name=body.name,
            email=body.email,
            phone_number=body.phone_number,
            amount=body.amount,
        )
    except OrderServiceError as e:
        _record_upstream_failure(db, request, e)
        raise
    return ok({"qrCodeBase64": qr})
