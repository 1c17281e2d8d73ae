# app/core/config.py
import os
from decimal import Decimal
from typing import List
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


class Settings(BaseModel):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Pharmacy Sales Order Desk")
    API_V1_STR: str = os.getenv("API_V1_STR", "/api")

    # CORS (env takes priority)
    BACKEND_CORS_ORIGINS: List[str] = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000",
        ))

    # ---------- Upstream services ----------
    ORDER_SERVICE_BASE_URL: str = os.getenv("ORDER_SERVICE_BASE_URL",
                                            "http://saffronwellcare.com")
    UPSTREAM_TIMEOUT_SECONDS: float = float(
        os.getenv("UPSTREAM_TIMEOUT_SECONDS", "15") or 15)

    # ---------- Local DB (error log only) ----------
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./sales_desk.db")
    ERROR_LOG_ENABLED: bool = _flag("ERROR_LOG_ENABLED", "true")

    # ---------- Logging ----------
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "")

    # ---------- Sales order defaults ----------
    DEFAULT_TAX_RATE: Decimal = Decimal(os.getenv("DEFAULT_TAX_RATE", "5") or "5")
    DEFAULT_HSN_CODE: str = os.getenv("DEFAULT_HSN_CODE", "3004")
    DEFAULT_GST_PERCENTAGE: Decimal = Decimal(
        os.getenv("DEFAULT_GST_PERCENTAGE", "5") or "5")


settings = Settings()
