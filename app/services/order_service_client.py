# app/services/order_service_client.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from app.core.config import settings
from app.schemas.order_service import (
    CreateSaleOrderRequest,
    CreateSaleOrderResponse,
    CustomerOut,
    CustomerResponse,
    SaleOrderOut,
    UnitListResponse,
    UpiQrResponse,
    UpstreamFailure,
)
from app.schemas.sales_order import UnitDefinition
from app.services.api_errors import OrderServiceError, extract_error_message

logger = logging.getLogger(__name__)

UNITS_PATH = "/inventory-service/api/v1/units"
CUSTOMER_PATH = "/customer-service/api/v1/customers/{customer_id}"
SALE_ORDER_PATH = "/order-service/api/v1/orders/{sale_order_id}"
CREATE_SALE_ORDER_PATH = "/order-service/api/v1/orders/create-sale-order"
UPI_QR_PATH = "/inventory-service/api/payments/upi/qr-code"


class OrderServiceClient:
    """
    Thin blocking client for the remote order / inventory / customer
    services. The caller's bearer token is forwarded on every request.
    No retries.
    """

    def __init__(
        self,
        token: Optional[str],
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.token = token
        self.base_url = (base_url or settings.ORDER_SERVICE_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.UPSTREAM_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    # ---------- transport ----------

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            raise OrderServiceError("No authentication token found",
                                    status_code=401)
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        fallback: str,
        not_found: Optional[str] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = self._headers()
        try:
            resp = self.session.request(method,
                                        url,
                                        json=json,
                                        headers=headers,
                                        timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise OrderServiceError(
                extract_error_message(exc=e, fallback=fallback)) from e

        body = _body(resp)
        if resp.status_code >= 400:
            msg = extract_error_message(body,
                                        status_code=resp.status_code,
                                        fallback=fallback,
                                        not_found=not_found)
            logger.warning("%s %s -> %s: %s", method, url, resp.status_code,
                           msg)
            raise OrderServiceError(msg,
                                    status_code=resp.status_code,
                                    payload=body)
        return body

    # ---------- endpoints ----------

    def list_units(self) -> List[UnitDefinition]:
        fallback = "Failed to fetch units"
        body = self._request("GET", UNITS_PATH, fallback=fallback)
        result = _parse(UnitListResponse, body)
        return _unwrap(result, body, fallback).data

    def get_customer(self, customer_id: int) -> CustomerOut:
        fallback = "Failed to fetch customer"
        body = self._request(
            "GET",
            CUSTOMER_PATH.format(customer_id=customer_id),
            fallback=fallback,
            not_found="Customer not found",
        )
        result = _parse(CustomerResponse, body,
                        "Customer data not found in response")
        return _unwrap(result, body, fallback).customer

    def get_sale_order(self, sale_order_id: int) -> SaleOrderOut:
        body = self._request(
            "GET",
            SALE_ORDER_PATH.format(sale_order_id=sale_order_id),
            fallback="Failed to fetch sale order",
            not_found="Sale order not found",
        )
        order = _find_sale_order(body)
        if order is None:
            raise OrderServiceError("Sale order data not found in response",
                                    payload=body)
        try:
            return SaleOrderOut.model_validate(order)
        except ValidationError as e:
            raise OrderServiceError("Invalid response format from server",
                                    payload=body) from e

    def create_sale_order(self,
                          request: CreateSaleOrderRequest) -> SaleOrderOut:
        fallback = "Failed to create sale order. Please check all fields and try again."
        payload = request.to_wire()
        logger.info(
            "Creating sale order: customer=%s items=%d total=%s",
            request.customer_id,
            len(request.sale_order_items),
            request.payment_info.total_amount,
        )
        body = self._request("POST",
                             CREATE_SALE_ORDER_PATH,
                             json=payload,
                             fallback=fallback)
        result = _parse(CreateSaleOrderResponse, body,
                        "Sale order data not found in response")
        return _unwrap(result, body, fallback).sale_order_dto

    def generate_upi_qr(self, *, name: str, email: str, phone_number: str,
                        amount: Decimal) -> str:
        fallback = "Failed to generate UPI QR code"
        body = self._request(
            "POST",
            UPI_QR_PATH,
            json={
                "name": name,
                "email": email,
                "phoneNumber": phone_number,
                "amount": float(amount),
            },
            fallback=fallback,
        )
        result = _parse(UpiQrResponse, body)
        return _unwrap(result, body, fallback).qr_code_base64


def _body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


def _parse(adapter: TypeAdapter,
           body: Any,
           invalid: str = "Invalid response format from server"):
    try:
        return adapter.validate_python(body)
    except ValidationError as e:
        raise OrderServiceError(invalid, payload=body) from e


def _unwrap(result, body: Any, fallback: str):
    if isinstance(result, UpstreamFailure):
        msg = extract_error_message(body, fallback=fallback)
        raise OrderServiceError(msg, payload=body)
    return result


def _find_sale_order(body: Any) -> Optional[Dict[str, Any]]:
    """
    The order endpoint answers with a bare order, {saleOrder: ...},
    {success, saleOrder} or a one-page list.
    """
    if not isinstance(body, dict):
        return None
    if body.get("saleOrderId"):
        return body
    if isinstance(body.get("saleOrder"), dict):
        return body["saleOrder"]
    page = body.get("saleOrderPaginationResponse")
    if isinstance(page, dict):
        orders = page.get("saleOrders") or []
        if orders:
            return orders[0]
    return None
