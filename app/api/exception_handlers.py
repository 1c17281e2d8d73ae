# FILE: app/api/exception_handlers.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.response import err
from app.services.api_errors import OrderServiceError
from app.services.sale_validation import SaleOrderValidationError

logger = logging.getLogger(__name__)


def upstream_status(exc: OrderServiceError) -> int:
    if exc.status_code in (401, 404):
        return exc.status_code
    return 502


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
            request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # exc.detail can be str/dict/list
        msg = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return err(msg=msg, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
            request: Request, exc: RequestValidationError) -> JSONResponse:
        return err(msg="Validation error",
                   status_code=422,
                   code="REQUEST_INVALID",
                   details=[{
                       "loc": list(e.get("loc", ())),
                       "msg": e.get("msg"),
                       "type": e.get("type"),
                   } for e in exc.errors()])

    @app.exception_handler(SaleOrderValidationError)
    async def sale_order_validation_handler(
            request: Request, exc: SaleOrderValidationError) -> JSONResponse:
        return err(msg=exc.message, status_code=422, code="VALIDATION")

    @app.exception_handler(OrderServiceError)
    async def order_service_error_handler(
            request: Request, exc: OrderServiceError) -> JSONResponse:
        structured = exc.structured
        return err(
            msg=exc.message,
            status_code=upstream_status(exc),
            code=(structured.error_code if structured and structured.error_code
                  else "UPSTREAM"),
            details=structured.model_dump(by_alias=True) if structured else None,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request,
                                          exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method,
                         request.url.path)
        return err(msg="Internal server error", status_code=500)
