"""FastAPI application exposing the invoice QR codec."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from . import __version__
from .codec import decode, encode
from .config import settings
from .errors import QRCodeError
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware
from .monitoring import metrics_payload, record_codec_operation
from .schemas import DecodeRequest, DecodeResponse, EncodeRequest, EncodeResponse, ErrorResponse

app = FastAPI(title="zatcaqr", version=__version__)
app.add_middleware(RequestLoggingMiddleware)

logger = logging.getLogger("zatcaqr.api")

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


def _warn_insecure_defaults() -> None:
    if settings.api_key == "dev-secret-key":
        logger.warning("api key is the built-in default", extra={"config_key": "api_key"})


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    _warn_insecure_defaults()


async def require_api_key(x_api_key: str = Header(...)) -> None:
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


@app.exception_handler(QRCodeError)
async def codec_error_handler(request: Request, exc: QRCodeError) -> JSONResponse:
    logger.info(
        "codec error",
        extra={"code": exc.code, "field": exc.field, "path": request.url.path},
    )
    body = ErrorResponse(code=exc.code, message=exc.message, field=exc.field)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled exception", extra={"path": request.url.path, "method": request.method})
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.post(
    "/v1/qr/encode",
    response_model=EncodeResponse,
    responses=_ERROR_RESPONSES,
    tags=["qr"],
    dependencies=[Depends(require_api_key)],
)
async def encode_invoice(payload: EncodeRequest) -> EncodeResponse:
    try:
        encoded = encode(payload.to_record())
    except QRCodeError as exc:
        record_codec_operation("encode", exc.code)
        raise
    record_codec_operation("encode")
    return EncodeResponse(payload=encoded)


@app.post(
    "/v1/qr/decode",
    response_model=DecodeResponse,
    responses=_ERROR_RESPONSES,
    tags=["qr"],
    dependencies=[Depends(require_api_key)],
)
async def decode_invoice(payload: DecodeRequest) -> DecodeResponse:
    try:
        record = decode(payload.payload)
    except QRCodeError as exc:
        record_codec_operation("decode", exc.code)
        raise
    record_codec_operation("decode")
    return DecodeResponse.from_record(record)
