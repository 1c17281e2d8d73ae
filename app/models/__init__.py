# app/models/__init__.py
from .error_log import SaleOrderErrorLog

__all__ = [
    "SaleOrderErrorLog",
]
