"""Exception handlers mapping the error taxonomy onto the failure envelope."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from protean.exceptions import ValidationError as ProteanValidationError

from shared.api.envelope import failure
from shared.errors import DomainError
from shared.logging import get_logger

logger = get_logger(__name__)

VALIDATION_MESSAGE = "Request validation failed"
CONFLICT_MESSAGE = "Resource was modified concurrently, please retry"


async def domain_error_handler(request: Request, exc: DomainError):
    if exc.status_code >= 500:
        logger.error("Domain error", path=request.url.path, error=exc.message)
    else:
        logger.info("Request rejected", path=request.url.path, status=exc.status_code, error=exc.message)
    return failure(exc.message, exc.status_code, exc.errors)


async def protean_validation_handler(request: Request, exc: ProteanValidationError):
    logger.info("Validation failed", path=request.url.path, errors=exc.messages)
    return failure(VALIDATION_MESSAGE, 400, exc.messages)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.info("Request validation failed", path=request.url.path, errors=errors)
    return failure(VALIDATION_MESSAGE, 400, errors)


async def object_not_found_handler(request: Request, exc: ObjectNotFoundError):
    logger.info("Object not found", path=request.url.path)
    return failure("Resource not found", 404, getattr(exc, "messages", None))


async def version_conflict_handler(request: Request, exc: ExpectedVersionError):
    logger.warning("Concurrent modification", path=request.url.path, error=str(exc))
    return failure(CONFLICT_MESSAGE, 409)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path)
    return failure("Internal server error", 500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(ProteanValidationError, protean_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ObjectNotFoundError, object_not_found_handler)
    app.add_exception_handler(ExpectedVersionError, version_conflict_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
