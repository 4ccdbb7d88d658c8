"""Error types of the pricing engine and their HTTP mapping"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class InvalidPrecondition(ValueError):
    """Negative quantity or price, or a percentage above 100"""
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CatalogUnavailable(Exception):
    """The catalog service could not be reached or answered with an error"""
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


async def invalid_precondition_handler(request: Request, exc: InvalidPrecondition):
    logger.error(
        f"Pricing precondition violated: {exc.message}",
        extra={"details": exc.details, "path": request.url.path}
    )

    return JSONResponse(
        status_code=422,
        content={
            "error": "invalid_precondition",
            "message": exc.message,
            "details": exc.details
        }
    )


async def catalog_unavailable_handler(request: Request, exc: CatalogUnavailable):
    logger.error(
        f"Catalog Error: {exc.message}",
        extra={"details": exc.details, "path": request.url.path}
    )

    return JSONResponse(
        status_code=502,
        content={
            "error": "catalog_unavailable",
            "message": "Catalog service unavailable",
            "details": exc.details
        }
    )


def register_error_handlers(app):
    """Register the engine's error handlers with the FastAPI app"""
    app.add_exception_handler(InvalidPrecondition, invalid_precondition_handler)
    app.add_exception_handler(CatalogUnavailable, catalog_unavailable_handler)
