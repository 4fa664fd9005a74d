from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from workout_logger.models.workout import OperationResult
from workout_logger.utils.log import logger


async def http_exception_handler(request: Request, exc: HTTPException):
    error = "not_found" if exc.status_code == 404 else "validation"
    if exc.status_code >= 500:
        error = "internal"
    result = OperationResult.fail(str(exc.detail), error=error)
    return JSONResponse(content=result.model_dump(mode="json"), status_code=exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Only the first problem is reported, like the service does
    errors = exc.errors()
    message = "Invalid request."
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first['msg']}" if field else first["msg"]

    logger.info(f"Rejected request to {request.url.path}: {message}")
    result = OperationResult.fail(message, error="validation")
    return JSONResponse(content=result.model_dump(mode="json"), status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")

    result = OperationResult.fail("Unexpected server error.", error="internal")
    return JSONResponse(content=result.model_dump(mode="json"), status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    # The handlers take narrower exceptions than the signature expects
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
