"""Pydantic schemas for API contracts."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator


class GenerateCodeRequest(BaseModel):
    amount: str = Field(pattern=r"^[0-9]+(\.[0-9]+)?$", max_length=13, description="Decimal amount, e.g. 10.00")
    description: str = Field(default="", max_length=140)

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        return value


class GenerateCodeResponse(BaseModel):
    pix_code: str
    crc: str
    txid: str
    qr_code: str = Field(description="PNG data URL of the rendered QR code")


class PixCodeRequest(BaseModel):
    pix_code: str = Field(min_length=1, max_length=512)


class ValidateCodeResponse(BaseModel):
    valid: bool
    fields: dict[str, str] | None = None


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    uptime: float = Field(description="Seconds since the application module was loaded")
