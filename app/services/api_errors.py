# app/services/api_errors.py
"""
One place that turns whatever the remote services send back on failure
into a single human message.

Known envelopes, in order of preference:
  {"errorType", "errorMessage", "errorCode", "severity", "path", ...}
  {"message": "..."}
  {"success": false, "error": "..."}
  "plain string body"
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

from app.schemas.common import CamelModel


class StructuredApiError(CamelModel):
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    severity: Optional[str] = None
    path: Optional[str] = None
    method: Optional[str] = None
    timestamp: Optional[str] = None


class OrderServiceError(Exception):
    """A call to the order / inventory / customer services failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def structured(self) -> Optional[StructuredApiError]:
        if not isinstance(self.payload, dict) or "errorMessage" not in self.payload:
            return None
        try:
            return StructuredApiError.model_validate(self.payload)
        except ValidationError:
            return None


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def extract_error_message(
    body: Any = None,
    *,
    status_code: Optional[int] = None,
    exc: Optional[BaseException] = None,
    fallback: str = "API request failed",
    not_found: Optional[str] = None,
) -> str:
    if status_code == 404 and not_found:
        return not_found

    if isinstance(body, dict):
        for key in ("errorMessage", "message", "error"):
            msg = _text(body.get(key))
            if msg:
                return msg
    else:
        msg = _text(body)
        if msg:
            return msg

    if exc is not None:
        msg = _text(str(exc))
        if msg:
            return msg

    return fallback
