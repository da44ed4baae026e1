import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pettrail.core.errors import ErrorKind, PetTrailError
from pettrail.schemas.common import ErrorResponse, ValidationIssue

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.INTERNAL_ERROR: 500,
}


def error_response(status: int, code: str, message: str, details=None) -> JSONResponse:
    error = ErrorResponse(code=code, message=message, details=details or [])
    return JSONResponse(status_code=status, content=error.model_dump())


async def handle_domain_error(request: Request, exc: PetTrailError):
    status = STATUS_BY_KIND[exc.kind]
    logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.kind.value, exc)
    return error_response(status, exc.kind.value, exc.message, exc.details())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        # drop the "body"/"query" prefix, keep the field path
        loc = [str(part) for part in err.get("loc", ())[1:]]
        details.append(ValidationIssue(field=".".join(loc) or "body", issue=err.get("msg", "invalid")))
    logger.warning("%s %s -> validation error: %s", request.method, request.url.path, details)
    return error_response(
        400,
        ErrorKind.VALIDATION_ERROR.value,
        "One or more validation errors occurred.",
        [d.model_dump() for d in details],
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return error_response(500, ErrorKind.INTERNAL_ERROR.value, "An unexpected error occurred.")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PetTrailError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
