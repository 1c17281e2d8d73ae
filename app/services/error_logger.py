from typing import Any, Dict, Optional
import logging
import traceback

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.error_log import SaleOrderErrorLog

logger = logging.getLogger(__name__)


def log_error(
    db: Session,
    *,
    description: Optional[str] = None,
    error_source: str = "backend",  # "upstream" | "backend"
    endpoint: Optional[str] = None,
    http_status: Optional[int] = None,
    customer_id: Optional[int] = None,
    request_payload: Optional[Any] = None,
    response_payload: Optional[Any] = None,
    stack_trace: Optional[str] = None,
) -> None:
    """
    Persist a failed sale order operation into sale_order_error_logs.
    Never raises: commit errors are rolled back and logged.
    """
    if not settings.ERROR_LOG_ENABLED:
        return
    try:
        row = SaleOrderErrorLog(
            error_source=error_source,
            description=(description or "")[:1000] or None,
            endpoint=endpoint,
            http_status=http_status,
            customer_id=customer_id,
            request_payload=_jsonable(request_payload),
            response_payload=_jsonable(response_payload),
            stack_trace=stack_trace,
        )
        db.add(row)
        db.commit()
    except Exception:
        # last resort – never raise from logger
        db.rollback()
        logger.exception("Failed to persist sale order error log")


def _jsonable(value: Any) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    if isinstance(value, dict):
        return value
    return {"raw": value if isinstance(value, (list, str, int, float)) else str(value)}


def format_exception(exc: Exception) -> str:
    return "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__))
