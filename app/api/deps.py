# app/api/deps.py
from __future__ import annotations

from typing import Generator, Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.services.order_service_client import OrderServiceClient


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def get_bearer_token(authorization: Optional[str] = Header(
    None)) -> Optional[str]:
    return _extract_bearer(authorization)


def get_order_service_client(token: Optional[str] = Depends(
    get_bearer_token)) -> Generator[OrderServiceClient, None, None]:
    """
    The token is only checked when an upstream call is actually made, so
    fully self-contained quotes work without one.
    """
    client = OrderServiceClient(token)
    try:
        yield client
    finally:
        client.close()
