# FILE: app/schemas/order_service.py
"""
Request and response shapes of the remote order / inventory / customer
services. Every response envelope is a success/failure union keyed on
``success``; bodies that omit ``success`` are treated as successful.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import TypeAdapter

from app.schemas.common import CamelModel
from app.schemas.sales_order import UnitDefinition

# ---------- Outbound: create sale order ----------


class SaleOrderItemPayload(CamelModel):
    item_name: str
    hsn_code: str
    description: str
    batch_no: str
    mfg: str
    exp_date: str
    mfg_date: str
    mrp: float
    packing: str = "S"
    quantity: int
    discount_type: Optional[str] = None
    discount_value: float
    tax: float
    unit_name: str
    packaging_size: int
    price: float
    tax_amount: float
    amount_without_tax: float
    discount_amount: float
    amount_with_discount_without_tax: float
    tax_after_discount: float
    total_payable_amount: float
    number_of_packs: Optional[float] = None

    def to_wire(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True)
        # numberOfPacks only travels for tablet lines; discountType stays even when null
        if self.number_of_packs is None:
            data.pop("numberOfPacks")
        return data


class PaymentInfoPayload(CamelModel):
    payment_type: str
    amount: float
    gst_percentage: float
    total_amount: float
    received_amount: float
    status: str


class CreateSaleOrderRequest(CamelModel):
    customer_id: int
    payment_status_id: int
    payment_type_id: int
    link_payment: Literal["true", "false"]
    deductible_wallet_amount: float
    paid_amount: float
    place_of_supply: int
    order_status: str
    extra_discount: Literal["true", "false"]
    upgrade_subscription: bool
    purchase_subscription: bool
    promo_code: Optional[str] = None
    payment_info: PaymentInfoPayload
    sale_order_items: List[SaleOrderItemPayload]
    checkout_type: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True, exclude={"sale_order_items"})
        if not self.checkout_type:
            data.pop("checkoutType")
        data["saleOrderItems"] = [it.to_wire() for it in self.sale_order_items]
        return data


# ---------- Inbound: envelopes ----------


class UpstreamFailure(CamelModel):
    success: Literal[False]
    message: Optional[str] = None
    error: Optional[str] = None


class UnitListSuccess(CamelModel):
    success: Literal[True] = True
    message: Optional[str] = None
    data: List[UnitDefinition]


class CustomerOut(CamelModel):
    customer_profile_id: int
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_loyalty_points: Optional[Decimal] = None
    wallet_amt: Optional[Decimal] = None


class CustomerSuccess(CamelModel):
    success: Literal[True] = True
    message: Optional[str] = None
    customer: CustomerOut


class SaleOrderItemOut(CamelModel):
    sale_order_item_id: Optional[int] = None
    item_name: Optional[str] = None
    hsn_code: Optional[Union[str, int]] = None
    description: Optional[str] = None
    batch_no: Optional[str] = None
    mfg: Optional[str] = None
    exp_date: Optional[str] = None
    mfg_date: Optional[str] = None
    mrp: Optional[Decimal] = None
    price_per_unit: Optional[Decimal] = None
    quantity: Optional[int] = None
    tax: Optional[Decimal] = None
    unit_name: Optional[str] = None
    discount_type: Optional[str] = None
    discount_value: Optional[Decimal] = None
    packaging_size: Optional[int] = None
    number_of_packs: Optional[Decimal] = None
    total_payable_amount: Optional[Decimal] = None


class SaleOrderOut(CamelModel):
    sale_order_id: int
    customer_id: Optional[int] = None
    payment_status_id: Optional[int] = None
    payment_type_id: Optional[int] = None
    order_status: Optional[str] = None
    sale_order_items: List[SaleOrderItemOut] = []
    paid_amount: Optional[Decimal] = None
    link_payment: Optional[Union[bool, str]] = None
    deductible_wallet_amount: Optional[Decimal] = None
    promo_code: Optional[str] = None
    sale_order_invoice_no: Optional[str] = None
    created_date: Optional[str] = None
    checkout_type: Optional[str] = None


class CreateSaleOrderSuccess(CamelModel):
    success: Literal[True]
    message: Optional[str] = None
    sale_order_dto: SaleOrderOut


class UpiQrSuccess(CamelModel):
    success: Literal[True] = True
    message: Optional[str] = None
    qr_code_base64: str


UnitListResponse = TypeAdapter(Union[UnitListSuccess, UpstreamFailure])
CustomerResponse = TypeAdapter(Union[CustomerSuccess, UpstreamFailure])
CreateSaleOrderResponse = TypeAdapter(
    Union[CreateSaleOrderSuccess, UpstreamFailure])
UpiQrResponse = TypeAdapter(Union[UpiQrSuccess, UpstreamFailure])
