from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Text,
    JSON,
)

from app.db.base import Base


class SaleOrderErrorLog(Base):
    """
    Failed sale order submissions and upstream lookups.
    Keeps the outbound body and whatever the order service answered.
    """
    __tablename__ = "sale_order_error_logs"

    id = Column(Integer, primary_key=True, index=True)

    # "upstream" | "backend"
    error_source = Column(String(50), nullable=False, default="backend")

    # user-facing message
    description = Column(String(1000), nullable=True)

    # where it happened, e.g. "POST /api/sales/orders"
    endpoint = Column(String(255), nullable=True)

    http_status = Column(Integer, nullable=True)
    customer_id = Column(Integer, nullable=True, index=True)

    # raw payloads
    request_payload = Column(JSON, nullable=True)
    response_payload = Column(JSON, nullable=True)

    stack_trace = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
