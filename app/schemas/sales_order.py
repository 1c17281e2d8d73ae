# FILE: app/schemas/sales_order.py
from __future__ import annotations

from decimal import Decimal
from enum import IntEnum
from typing import List, Literal, Optional, Union

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, Money

UnitSelector = Literal["base", "secondary"]


class PaymentStatus(IntEnum):
    PAID = 1
    PARTIALLY_PAID = 2
    UNPAID = 3

    @property
    def label(self) -> str:
        return {
            PaymentStatus.PAID: "Paid",
            PaymentStatus.PARTIALLY_PAID: "Partially Paid",
            PaymentStatus.UNPAID: "Unpaid",
        }[self]


# ---------- Units ----------


class Conversion(CamelModel):
    conversion_id: Optional[int] = None
    from_unit: Optional[str] = None
    to_unit: Optional[str] = None
    conversion_factor: Optional[Money] = None


class UnitDefinition(CamelModel):
    unit_id: int
    base_unit: Optional[str] = None
    secondary_unit: Optional[str] = None
    short_name: Optional[str] = None
    conversions: List[Conversion] = Field(default_factory=list)
    product_id: Optional[int] = None


# ---------- Draft (inbound) ----------


class OrderLineIn(CamelModel):
    """
    One product line of an order being edited.
    Quantity / MRP are unconstrained here; the
    pre-submission checks report them with user-facing messages.
    """
    product_name: str = ""
    description: Optional[str] = None
    hsn: Optional[str] = None
    batch_no: Optional[str] = None
    manufacturer: Optional[str] = None
    mfg_date: Optional[str] = None
    exp_date: Optional[str] = None

    mrp: Optional[Money] = None
    quantity: Optional[int] = 1
    tax_rate: Optional[Money] = None
    sale_discount: Optional[Money] = None

    unit_id: Optional[int] = None
    selected_unit_type: UnitSelector = "base"
    packaging_size: Optional[int] = 1

    @field_validator("hsn", mode="before")
    @classmethod
    def _hsn_to_str(cls, v: Union[int, str, None]) -> Optional[str]:
        if v is None or v == "":
            return None
        return str(v)


class SaleOrderDraftIn(CamelModel):
    customer_id: Optional[int] = None

    # When omitted these are fetched from the customer / inventory services
    wallet_balance: Optional[Money] = None
    units: Optional[List[UnitDefinition]] = None

    payment_status_id: PaymentStatus = PaymentStatus.PAID
    payment_type_id: int = 1
    payment_type: str = "Cash"
    gst_percentage: Optional[Money] = None

    # None = on when the customer has a wallet balance
    link_payment: Optional[bool] = None
    deductible_wallet_amount: Money = Decimal("0")
    received_amount: Optional[Money] = None

    place_of_supply: int = 1
    order_status: str = "Paid"
    extra_discount: bool = False
    checkout_type: Optional[str] = None
    upgrade_subscription: bool = False
    purchase_subscription: bool = False
    promo_code: Optional[str] = None

    lines: List[OrderLineIn] = Field(default_factory=list)


class WalletClampIn(CamelModel):
    requested_amount: Money
    wallet_balance: Money
    total_with_tax: Money


# ---------- Derived (outbound to the UI) ----------


class CalculatedAmountsOut(CamelModel):
    price: Money
    tax_amount: Money
    amount_without_tax: Money
    discount_amount: Money
    amount_with_discount_without_tax: Money
    tax_after_discount: Money
    total_payable_amount: Money
    actual_tablet_count: Money
    number_of_packs: Money


class LineBreakdownOut(CamelModel):
    product_name: str
    quantity: int
    mrp: Money
    tax_rate: Money
    unit_label: Optional[str] = None
    discount_type: str
    discount_value: Money
    amounts: CalculatedAmountsOut


class OrderTotalsOut(CamelModel):
    subtotal: Money
    tax_amount: Money
    total_with_tax: Money
    discount_amount: Money
    lines: List[LineBreakdownOut]


class PaymentSummaryOut(CamelModel):
    status: str
    link_payment: bool
    wallet_balance: Money
    wallet_used: Money
    remaining_payable: Money
    received_amount: Money
    paid_amount: Money


class SaleOrderQuoteOut(CamelModel):
    totals: OrderTotalsOut
    payment: PaymentSummaryOut


class SaleOrderCreatedOut(CamelModel):
    sale_order_id: Optional[int] = None
    sale_order_invoice_no: Optional[str] = None
    message: str
    quote: SaleOrderQuoteOut


class UpiQrIn(CamelModel):
    name: str
    email: str
    phone_number: str
    amount: Money = Field(..., gt=0)
