"""Request ids, request logging, and uniform JSON error responses."""

from __future__ import annotations

from time import perf_counter
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from supertodo.core.config import settings
from supertodo.core.logging import get_logger, request_id_var

if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"
_HEALTH_PATHS = frozenset({"/health", "/healthz", "/readyz"})
_STATUS_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_409_CONFLICT: "CONFLICT",
    422: "VALIDATION",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "INTERNAL",
}


def error_code_for_status(status_code: int) -> str:
    """Map an HTTP status to the machine-readable error code returned to clients."""
    return _STATUS_CODES.get(status_code, f"HTTP_{status_code}")


class RequestIdMiddleware:
    """Assign a request id, echo it in the response, and log the request."""

    def __init__(self, app: ASGIApp) -> None:
        self._app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        request_id = _incoming_request_id(scope) or uuid4().hex
        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_var.set(request_id)
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        started = perf_counter()
        header_name = REQUEST_ID_HEADER.lower().encode("latin-1")

        async def send_with_request_id(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = int(message["status"])
                headers = list(message.get("headers", []))
                # Error responses already carry the id set by `_error_response`.
                if not any(name.lower() == header_name for name, _ in headers):
                    headers.append((header_name, request_id.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        try:
            await self._app(scope, receive, send_with_request_id)
        finally:
            _log_request(
                method=str(scope.get("method", "")),
                path=str(scope.get("path", "")),
                status_code=status_code,
                duration_ms=(perf_counter() - started) * 1000,
            )
            request_id_var.reset(token)


def _incoming_request_id(scope: Scope) -> str | None:
    header_name = REQUEST_ID_HEADER.lower().encode("latin-1")
    for name, value in scope.get("headers", []):
        if name.lower() == header_name:
            cleaned = value.decode("latin-1").strip()
            return cleaned or None
    return None


def _log_request(*, method: str, path: str, status_code: int, duration_ms: float) -> None:
    if path in _HEALTH_PATHS and not settings.request_log_include_health:
        return
    extra = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": round(duration_ms, 2),
    }
    slow_threshold_ms = settings.request_log_slow_ms
    if slow_threshold_ms and duration_ms >= slow_threshold_ms:
        logger.warning(
            "http.request.slow",
            extra={**extra, "slow_threshold_ms": slow_threshold_ms},
        )
        return
    logger.info(
        "http.request method=%s path=%s status=%s duration_ms=%.2f",
        method,
        path,
        status_code,
        duration_ms,
        extra=extra,
    )


def _get_request_id(request: Request) -> str | None:
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    return None


def _error_payload(
    *,
    detail: object,
    request_id: str | None,
    code: str | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"detail": detail}
    if request_id:
        payload["request_id"] = request_id
    if code:
        payload["code"] = code
    return payload


def _json_safe(value: object) -> object:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _error_response(
    request: Request,
    *,
    status_code: int,
    detail: object,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    request_id = _get_request_id(request)
    response_headers = dict(headers or {})
    if request_id:
        response_headers[REQUEST_ID_HEADER] = request_id
    return JSONResponse(
        status_code=status_code,
        content=_error_payload(
            detail=detail,
            request_id=request_id,
            code=error_code_for_status(status_code),
        ),
        headers=response_headers or None,
    )


async def _request_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, RequestValidationError):
        msg = "Expected RequestValidationError"
        raise TypeError(msg)
    detail = jsonable_encoder(_json_safe(exc.errors()))
    return _error_response(
        request,
        status_code=422,
        detail=detail,
    )


async def _response_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, ResponseValidationError):
        msg = "Expected ResponseValidationError"
        raise TypeError(msg)
    logger.error(
        "http.response.validation_failed path=%s errors=%s",
        request.url.path,
        _json_safe(exc.errors()),
    )
    return _error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal Server Error",
    )


async def _http_exception_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, StarletteHTTPException):
        msg = "Expected StarletteHTTPException"
        raise TypeError(msg)
    return _error_response(
        request,
        status_code=exc.status_code,
        detail=exc.detail,
        headers=exc.headers,
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "http.request.unhandled_error path=%s error_type=%s",
        request.url.path,
        exc.__class__.__name__,
        exc_info=exc,
    )
    return _error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal Server Error",
    )


def install_error_handling(app: FastAPI) -> None:
    """Register request-id middleware and JSON error handlers on *app*."""
    app.add_middleware(RequestIdMiddleware)
    app.add_exception_handler(RequestValidationError, _request_validation_exception_handler)
    app.add_exception_handler(ResponseValidationError, _response_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
