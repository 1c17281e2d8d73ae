"""Tests for the outbound create-sale-order payload."""

from datetime import date
from decimal import Decimal

from app.schemas.sales_order import PaymentStatus, SaleOrderDraftIn
from app.services.sale_payload import (
    api_quantity,
    build_create_sale_order_request,
    build_sale_order_item,
    success_message,
)
from app.services.sale_totals import aggregate, reconcile_payment
from conftest import unit_table

TODAY = date(2026, 1, 15)


def _draft(**kw) -> SaleOrderDraftIn:
    data = {
        "customer_id": 7,
        "lines": [
            {
                "product_name": "Dolo 650",
                "unit_id": 1,
                "selected_unit_type": "secondary",
                "quantity": 40,
                "packaging_size": 30,
                "mrp": 30,
                "tax_rate": 12,
                "sale_discount": 5,
                "hsn": 3004,
                "batch_no": "B-1",
            },
            {
                "product_name": "Dolo 650",
                "unit_id": 1,
                "selected_unit_type": "base",
                "quantity": 2,
                "packaging_size": 10,
                "mrp": 100,
                "tax_rate": 12,
            },
            {
                "product_name": "Cough Syrup",
                "quantity": 3,
                "mrp": 85,
            },
        ],
    }
    data.update(kw)
    return SaleOrderDraftIn(**data)


def _request(draft: SaleOrderDraftIn, *, link=False, balance=0):
    totals = aggregate(draft.lines, unit_table())
    payment = reconcile_payment(
        totals.total_with_tax,
        payment_status=draft.payment_status_id,
        link_payment=link,
        deductible_wallet_amount=draft.deductible_wallet_amount,
        wallet_balance=balance,
        received_amount=draft.received_amount,
    )
    return totals, payment, build_create_sale_order_request(
        draft, totals, payment, today=TODAY)


def test_api_quantity_per_unit():
    draft = _draft()
    totals = aggregate(draft.lines, unit_table())
    tablet, strip, other = totals.lines
    assert api_quantity(tablet) == 40
    assert api_quantity(strip) == 2
    assert api_quantity(other) == 3


def test_tablet_item_carries_number_of_packs():
    draft = _draft()
    totals = aggregate(draft.lines, unit_table())
    item = build_sale_order_item(draft.lines[0], totals.lines[0],
                                 today=TODAY).to_wire()
    assert item["unitName"] == "Tablet"
    assert item["numberOfPacks"] == 1.3333
    assert item["discountType"] == "percentage"
    assert item["hsnCode"] == "3004"
    assert item["batchNo"] == "B-1"


def test_non_tablet_items_omit_number_of_packs():
    draft = _draft()
    totals = aggregate(draft.lines, unit_table())
    strip = build_sale_order_item(draft.lines[1], totals.lines[1],
                                  today=TODAY).to_wire()
    other = build_sale_order_item(draft.lines[2], totals.lines[2],
                                  today=TODAY).to_wire()
    assert "numberOfPacks" not in strip
    assert "numberOfPacks" not in other
    # null, not "none"
    assert "discountType" in strip and strip["discountType"] is None
    assert other["unitName"] == "PCS"


def test_item_defaults_for_missing_fields():
    draft = _draft()
    totals = aggregate(draft.lines, unit_table())
    item = build_sale_order_item(draft.lines[2], totals.lines[2], today=TODAY)
    assert item.hsn_code == "3004"
    assert item.description == "Product description"
    assert item.mfg == "Manufacturer"
    assert item.batch_no.startswith("BATCH-")
    assert item.mfg_date == "2026-01-15"
    assert item.exp_date == "2027-01-15"
    assert item.packing == "S"
    assert item.tax == 5.0


def test_paid_order_request():
    draft = _draft()
    totals, payment, req = _request(draft)
    wire = req.to_wire()

    assert wire["customerId"] == 7
    assert wire["paymentStatusId"] == 1
    assert wire["linkPayment"] == "false"
    assert wire["extraDiscount"] == "false"
    assert wire["deductibleWalletAmount"] == 0.0
    assert wire["paidAmount"] == float(totals.total_with_tax)
    assert wire["paymentInfo"]["amount"] == float(totals.total_with_tax)
    assert wire["paymentInfo"]["totalAmount"] == float(totals.total_with_tax)
    assert wire["paymentInfo"]["receivedAmount"] == float(totals.total_with_tax)
    assert wire["paymentInfo"]["status"] == "Paid"
    assert wire["paymentInfo"]["gstPercentage"] == 5.0
    assert "checkoutType" not in wire
    assert len(wire["saleOrderItems"]) == 3


def test_wallet_linked_request():
    draft = _draft(deductible_wallet_amount=Decimal("50"))
    totals, payment, req = _request(draft, link=True, balance=Decimal("80"))
    wire = req.to_wire()

    assert wire["linkPayment"] == "true"
    assert wire["deductibleWalletAmount"] == 50.0
    assert wire["paymentInfo"]["amount"] == float(totals.total_with_tax -
                                                  Decimal("50"))
    assert wire["paymentInfo"]["totalAmount"] == float(totals.total_with_tax)


def test_partial_request_sends_entered_amount():
    draft = _draft(payment_status_id=PaymentStatus.PARTIALLY_PAID,
                   received_amount=Decimal("20"),
                   checkout_type="COUNTER")
    _, _, req = _request(draft)
    wire = req.to_wire()
    assert wire["paymentStatusId"] == 2
    assert wire["paidAmount"] == 20.0
    assert wire["paymentInfo"]["receivedAmount"] == 20.0
    assert wire["paymentInfo"]["status"] == "Partially Paid"
    assert wire["checkoutType"] == "COUNTER"


def test_success_message():
    draft = _draft(promo_code="SAVE10")
    assert success_message(draft, 55, Decimal("0")) == (
        "Successfully created sales order with 3 products with promo code: "
        "SAVE10! Order ID: 55")

    single = _draft(lines=[{"product_name": "Syrup", "mrp": 10}])
    assert success_message(single, 9, Decimal("12.5")) == (
        "Successfully created sales order with 1 product! Order ID: 9 "
        "(₹12.50 paid from wallet)")


def test_mrp_is_sent_as_entered():
    draft = _draft(lines=[{"product_name": "Drops", "mrp": "30.125",
                           "quantity": 1, "tax_rate": 0}])
    totals = aggregate(draft.lines, unit_table())
    item = build_sale_order_item(draft.lines[0], totals.lines[0], today=TODAY)
    assert item.mrp == 30.125
    assert item.price == 30.13
