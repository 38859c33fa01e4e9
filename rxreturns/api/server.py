"""FastAPI server for the pharmacy returns optimization API."""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from rxreturns.api.config_routes import router as config_router
from rxreturns.api.credit_report_routes import router as credit_report_router
from rxreturns.api.distributor_routes import router as distributor_router
from rxreturns.api.optimization_routes import router as optimization_router
from rxreturns.api.product_list_routes import router as product_list_router
from rxreturns.config import PHARMACY_ID_HEADER
from rxreturns.db import init_db
from rxreturns.errors import RxReturnsError
from rxreturns.models.outputs import success
from rxreturns.utils.logger import get_logger, request_context

logger = get_logger("rxreturns.api.server")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    """Pydantic error details without the raw input or ctx objects (not always JSON-safe)."""
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()]


@asynccontextmanager
async def _lifespan(app: FastAPI):
    init_db()
    logger.info("api.startup")
    yield
    logger.info("api.shutdown")


def create_app() -> FastAPI:
    """Create the FastAPI app with all routers and the error envelope handlers."""
    app = FastAPI(
        title="Pharmacy Returns Optimization API",
        version="0.1.0",
        lifespan=_lifespan,
    )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        pharmacy_id = (request.headers.get(PHARMACY_ID_HEADER) or "").strip() or None
        with request_context(
            request_id=request.headers.get("X-Request-Id") or uuid.uuid4().hex[:12],
            method=request.method,
            path=request.url.path,
            pharmacy_id=pharmacy_id,
        ):
            return await call_next(request)

    @app.exception_handler(RxReturnsError)
    async def handle_service_error(request: Request, exc: RxReturnsError) -> JSONResponse:
        logger.info("api.request_rejected", status_code=exc.status_code, message=exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg", "Invalid request"))
        return JSONResponse(
            status_code=400,
            content={"status": "error", "message": message, "errors": _validation_errors(exc)},
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_db_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("api.database_error", error=str(exc), exc_info=exc)
        return _error(500, "Internal server error")

    app.include_router(optimization_router)
    app.include_router(product_list_router)
    app.include_router(credit_report_router)
    app.include_router(distributor_router)
    app.include_router(config_router)

    @app.get("/health")
    async def health() -> dict[str, object]:
        return success({"health": "ok"})

    return app
