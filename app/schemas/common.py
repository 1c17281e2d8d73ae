# FILE: app/schemas/common.py
from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, Optional
from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimal in Python, plain JSON number on the wire
Money = Annotated[Decimal,
                  PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """
    Wire models: snake_case in Python, camelCase on the wire.
    Accepts either spelling on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiError(BaseModel):
    msg: str
    code: Optional[str] = None
    details: Optional[Any] = None


class ApiResponse(BaseModel):
    ok: bool
    data: Optional[Any] = None
    meta: Optional[Any] = None
    error: Optional[ApiError] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)
