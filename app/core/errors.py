"""Exception handlers rendering every failure in the response envelope."""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.envelope import FieldError, error_body
from app.services.validation import RequestInvalid

logger = logging.getLogger("app")


def install_error_handlers(app: FastAPI, *, verbose: bool) -> None:
    @app.exception_handler(RequestInvalid)
    async def request_invalid_handler(request: Request, exc: RequestInvalid):
        return JSONResponse(status_code=400, content=error_body(exc.message, exc.errors))

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        errors = [
            FieldError(
                location=str(err["loc"][0]) if err.get("loc") else "body",
                field=".".join(str(part) for part in err.get("loc", ())[1:]),
                message=err.get("msg", "Invalid value"),
            )
            for err in exc.errors()
        ]
        return JSONResponse(status_code=400, content=error_body("Request body must be a JSON object", errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):
        if not isinstance(exc, HTTPException) and exc.status_code in (404, 405):
            # raised by routing or static files, not by an endpoint
            return JSONResponse(status_code=404, content=error_body("Endpoint not found"))
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        if verbose:
            logger.exception(
                "Unhandled error | path=%s | method=%s | client=%s",
                request.url.path,
                request.method,
                request.client.host if request.client else "unknown",
            )
        else:
            logger.error(
                "Unhandled error | path=%s | method=%s | %s",
                request.url.path,
                request.method,
                type(exc).__name__,
            )
        return JSONResponse(status_code=500, content=error_body("Internal server error"))
