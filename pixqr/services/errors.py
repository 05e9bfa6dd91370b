"""Shared service error definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ServiceError(Exception):
    code: str
    message: str
    status_code: int = 400

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"

    def to_body(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class ContractViolation(ServiceError):
    """Caller supplied data that cannot be encoded into a PIX payload."""


class RenderError(ServiceError):
    """The QR imaging stack failed to produce an image."""


def err_field_too_long(tag: str, length: int) -> ContractViolation:
    return ContractViolation(
        code="ERR_FIELD_TOO_LONG",
        message=f"Field {tag} value has {length} characters, maximum is 99",
    )


def err_non_ascii(tag: str) -> ContractViolation:
    return ContractViolation(code="ERR_NON_ASCII", message=f"Field {tag} value must be ASCII")


def err_bad_tag(tag: str) -> ContractViolation:
    return ContractViolation(code="ERR_BAD_TAG", message=f"Tag {tag!r} must be two digits")


def err_bad_amount(message: str | None = None) -> ContractViolation:
    return ContractViolation(code="ERR_BAD_AMOUNT", message=message or "Amount must be a decimal string")


def err_render_failed(message: str | None = None) -> RenderError:
    return RenderError(code="ERR_RENDER_FAILED", message=message or "Failed to generate QR code", status_code=500)
