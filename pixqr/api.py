"""FastAPI application for pixqr."""
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import DEFAULT_PIX_KEY, settings
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware, route_path
from .monitoring import metrics_payload, record_service_error
from .schemas import GenerateCodeRequest, GenerateCodeResponse, HealthResponse, PixCodeRequest, ValidateCodeResponse
from .services.errors import ServiceError
from .services.generator import PixCodeService

app = FastAPI(title="pixqr", version="0.1.0")
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CORSMiddleware, allow_origins=settings.allowed_origins, allow_methods=["*"], allow_headers=["*"])

logger = logging.getLogger("pixqr.api")

_STARTED_AT = time.monotonic()


def _warn_insecure_defaults() -> None:
    if settings.pix_key == DEFAULT_PIX_KEY:
        logger.warning(
            "pix key is using the default value",
            extra={"config_key": "pix_key"},
        )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    _warn_insecure_defaults()


@lru_cache(maxsize=1)
def get_pix_service() -> PixCodeService:
    """Process-wide service owning the render cache."""

    return PixCodeService.from_settings(settings)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    path = route_path(request)
    logger.warning(
        "service error",
        extra={"code": exc.code, "path": path, "method": request.method},
    )
    record_service_error(exc.code, path)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled exception",
        extra={"path": route_path(request), "method": request.method},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


@app.get("/health", response_model=HealthResponse, tags=["system"])
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
    )


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.post("/v1/pix/qrcode", response_model=GenerateCodeResponse, tags=["pix"])
def generate_qr(payload: GenerateCodeRequest, service: PixCodeService = Depends(get_pix_service)) -> GenerateCodeResponse:
    result = service.generate_with_image(payload.amount, payload.description)
    return GenerateCodeResponse(
        pix_code=result.encoded.payload,
        crc=result.encoded.crc,
        txid=result.encoded.txid,
        qr_code=result.image.data_url,
    )


@app.post("/v1/pix/validate", response_model=ValidateCodeResponse, tags=["pix"])
def validate_code(payload: PixCodeRequest, service: PixCodeService = Depends(get_pix_service)) -> ValidateCodeResponse:
    result = service.inspect_code(payload.pix_code)
    return ValidateCodeResponse(valid=result.valid, fields=result.fields)


@app.post("/v1/pix/render", tags=["pix"], response_class=Response)
def render_code(payload: PixCodeRequest, service: PixCodeService = Depends(get_pix_service)) -> Response:
    image = service.render_image(payload.pix_code)
    return Response(content=image.png_bytes, media_type="image/png")
