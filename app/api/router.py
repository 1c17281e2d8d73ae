# app/api/router.py
from fastapi import APIRouter
from app.api import (
    routes_sales_orders,
    routes_units,
)

api_router = APIRouter()

api_router.include_router(routes_units.router)
api_router.include_router(routes_sales_orders.router)
