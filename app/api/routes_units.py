from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_order_service_client
from app.api.response import ok
from app.services.order_service_client import OrderServiceClient

router = APIRouter(prefix="/units", tags=["Units"])


@router.get("")
def list_units(client: OrderServiceClient = Depends(
    get_order_service_client)):
    units = client.list_units()
    return ok(units, meta={"count": len(units)})
