# app/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """All local tables (currently only the sale order error log) inherit from this."""
    pass
