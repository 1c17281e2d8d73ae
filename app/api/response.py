# FILE: app/api/response.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.schemas.common import ApiError, ApiResponse


def _json(status_code: int, content: Any, **encode_kw) -> JSONResponse:
    # models go out by alias (camelCase), Money as numbers
    return JSONResponse(status_code=status_code,
                        content=jsonable_encoder(content, **encode_kw))


def ok(
    data: Any = None,
    *,
    meta: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> JSONResponse:
    """{"ok": true, "data": ..., "meta": {...}}; meta only when given."""
    # null fields inside data (e.g. discountType) are kept
    body: Dict[str, Any] = {"ok": True, "data": data}
    if meta is not None:
        body["meta"] = meta
    return _json(status_code, body)


def err(
    msg: str = "Something went wrong",
    *,
    status_code: int = 400,
    code: Optional[str] = None,
    details: Any = None,
) -> JSONResponse:
    """{"ok": false, "error": {"msg", "code", "details"}}"""
    body = ApiResponse(ok=False,
                       error=ApiError(msg=msg, code=code, details=details))
    return _json(status_code, body, exclude={"data", "meta"})
