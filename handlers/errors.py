import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from models.errors import (
    ConflictError,
    NotFoundError,
    RegistryError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)
from utils.utils import utc_now

module_logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: (400, "VALIDATION_ERROR"),
    NotFoundError: (404, "NOT_FOUND"),
    ConflictError: (409, "CONFLICT"),
    UnauthorizedError: (401, "UNAUTHORIZED"),
    StorageError: (500, "INTERNAL_ERROR"),
}


def camel_field(field: str) -> str:
    # "other_rpc_urls[3]" -> "otherRpcUrls[3]"
    name, sep, rest = field.partition("[")
    return to_camel(name) + sep + rest


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: list[dict] | None = None,
) -> JSONResponse:
    error = {"code": code, "message": message}
    if details:
        error["details"] = details

    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "request_id": getattr(request.state, "request_id", None),
            "timestamp": utc_now().isoformat(),
        },
    )


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    status_code, code = 500, "INTERNAL_ERROR"
    for error_type, mapping in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            status_code, code = mapping
            break

    if status_code >= 500:
        module_logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
        return error_response(request, status_code, code, "An unexpected error occurred")

    details = None
    if isinstance(exc, ValidationError):
        details = [{"field": camel_field(exc.field), "message": exc.reason}]

    return error_response(request, status_code, code, str(exc), details)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    module_logger.exception(f"{request.method} {request.url.path} failed: {exc!r}")
    return error_response(request, 500, "INTERNAL_ERROR", "An unexpected error occurred")


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()

    if any(err["loc"][:1] == ("path",) for err in errors):
        return error_response(request, 400, "INVALID_UUID", "Invalid network id")

    details = [
        {
            "field": ".".join(str(part) for part in err["loc"][1:]) or "body",
            "message": err["msg"],
        }
        for err in errors
    ]
    return error_response(request, 400, "VALIDATION_ERROR", "Invalid request body", details)


def setup_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
