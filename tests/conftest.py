"""Shared pytest fixtures for the sales order desk tests."""

import os

# Must be set before app.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ERROR_LOG_ENABLED", "true")

from decimal import Decimal
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db, get_order_service_client
from app.db.session import init_db
from app.main import app
from app.schemas.order_service import CreateSaleOrderRequest, CustomerOut, SaleOrderOut
from app.schemas.sales_order import UnitDefinition
from app.services.api_errors import OrderServiceError


def unit_table() -> List[UnitDefinition]:
    """Strip/Tablet medicine unit plus a plain bottle unit."""
    return [
        UnitDefinition(unit_id=1, base_unit="Strip", secondary_unit="Tablet"),
        UnitDefinition(unit_id=2, base_unit="Bottle", secondary_unit=None),
    ]


class FakeOrderServiceClient:
    """In-memory stand-in for OrderServiceClient that records calls."""

    def __init__(self, *, wallet_amt: Decimal = Decimal("0")) -> None:
        self.units = unit_table()
        self.wallet_amt = wallet_amt
        self.created: List[CreateSaleOrderRequest] = []
        self.calls: List[str] = []
        self.fail_with: Optional[OrderServiceError] = None
        self.stored_order: Optional[SaleOrderOut] = None

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def list_units(self) -> List[UnitDefinition]:
        self.calls.append("list_units")
        self._maybe_fail()
        return self.units

    def get_customer(self, customer_id: int) -> CustomerOut:
        self.calls.append("get_customer")
        self._maybe_fail()
        return CustomerOut(customer_profile_id=customer_id,
                           customer_name="Test Customer",
                           wallet_amt=self.wallet_amt)

    def get_sale_order(self, sale_order_id: int) -> SaleOrderOut:
        self.calls.append("get_sale_order")
        self._maybe_fail()
        if self.stored_order is None:
            raise OrderServiceError("Sale order not found", status_code=404)
        return self.stored_order

    def create_sale_order(self,
                          request: CreateSaleOrderRequest) -> SaleOrderOut:
        self.calls.append("create_sale_order")
        self._maybe_fail()
        self.created.append(request)
        return SaleOrderOut(sale_order_id=55,
                            customer_id=request.customer_id,
                            sale_order_invoice_no="INV-0055")

    def generate_upi_qr(self, *, name, email, phone_number, amount) -> str:
        self.calls.append("generate_upi_qr")
        self._maybe_fail()
        return "iVBORw0KGgo="


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    TestingSession = sessionmaker(bind=db_engine,
                                  autocommit=False,
                                  autoflush=False)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_client():
    return FakeOrderServiceClient()


@pytest.fixture
def client(db_engine, fake_client):
    TestingSession = sessionmaker(bind=db_engine,
                                  autocommit=False,
                                  autoflush=False)

    def _get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_order_service_client] = lambda: fake_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
