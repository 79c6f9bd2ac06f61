"""HTTP error mapping for the Storefront API.

Domain validation and missing aggregates are mapped by Protean's FastAPI
integration (400 and 404). The handlers below cover what it leaves out.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError
from protean.integrations.fastapi import register_exception_handlers

from storefront.order.order import PartialOrderError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(ExpectedVersionError)
    async def concurrent_update(request: Request, exc: ExpectedVersionError) -> JSONResponse:
        logger.warning("api.concurrent_update", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=409,
            content={"message": "The resource was changed by another request, retry"},
        )

    @app.exception_handler(PartialOrderError)
    async def partial_order(request: Request, exc: PartialOrderError) -> JSONResponse:
        logger.error(
            "order.partial",
            order_id=exc.order_id,
            expected_items=exc.expected,
            found_items=exc.found,
        )
        return JSONResponse(status_code=500, content={"message": "Order is incomplete"})

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("api.unhandled_error", path=request.url.path, method=request.method)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
