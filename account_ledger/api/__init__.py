"""
Account Ledger API Application Factory
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import LedgerConfig, get_config
from ..errors import LedgerError
from ..logging_config import get_logger, log_action, setup_logging
from ..storage import StorageInterface, create_storage
from .auth import router as auth_router
from .bank import router as bank_router
from .dependencies import LedgerSystem


logger = get_logger("ledger.api")


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Business-rule failures pass through; infrastructure detail is suppressed"""
    if exc.http_status >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return JSONResponse(
            status_code=500,
            content={"error": "SERVER_ERROR", "message": "Server error"},
        )

    headers = {"WWW-Authenticate": "Bearer"} if exc.http_status == 401 else None
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": exc.reason, "message": exc.message},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log_action(
        logger, "warning", "Rejected malformed request body",
        action="invalid_request", resource=request.url.path,
        extra={"errors": len(exc.errors())},
    )
    return JSONResponse(
        status_code=400,
        content={"error": "INVALID_INPUT", "message": "Invalid request body"},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        content = {"error": "NOT_FOUND", "message": f"Cannot {request.method} {request.url.path}"}
    else:
        content = {"error": "HTTP_ERROR", "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content,
                        headers=getattr(exc, "headers", None))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "SERVER_ERROR", "message": "Server error"},
    )


def create_app(config: Optional[LedgerConfig] = None,
               storage: Optional[StorageInterface] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Service configuration, defaults to the environment-derived one
        storage: Store to use; when omitted one is created from
            ``config.database_url`` and closed on shutdown

    Returns:
        Configured FastAPI application
    """
    config = config or get_config()
    setup_logging(config.log_level, config.log_format)

    owns_storage = storage is None
    if storage is None:
        storage = create_storage(
            config.database_url,
            pool_size=config.database_pool_size,
            pool_timeout=config.database_pool_timeout,
        )
    if config.auto_migrate:
        storage.initialize_schema()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_storage:
            storage.close()

    app = FastAPI(
        title="Account Ledger API",
        description="Customer accounts with deposits, withdrawals, transfers by phone and a transaction log",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.system = LedgerSystem(config, storage)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(bank_router, prefix="/api/bank", tags=["Bank"])

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "account_ledger_api",
            "version": __version__
        }

    @app.get("/", tags=["System"])
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Account Ledger API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "auth": "/api/auth",
                "bank": "/api/bank",
            }
        }

    return app


def run_server(host: Optional[str] = None, port: Optional[int] = None,
               config: Optional[LedgerConfig] = None) -> None:
    """Run the API with uvicorn"""
    config = config or get_config()
    uvicorn.run(
        create_app(config),
        host=host or config.api_host,
        port=port or config.api_port,
        log_level=config.log_level.lower(),
    )
