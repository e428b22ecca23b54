import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from db import create_db_and_tables
from exceptions import MarketplaceException
from middleware.security_headers import SecurityHeadersMiddleware, CSPMiddleware
from utils.error_handler import build_error_notice, get_http_status
from utils.localizator import Localizator
from web.api_router import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    await create_db_and_tables()
    logging.info(f"[Startup] Marketplace API ready ({config.RUNTIME_ENVIRONMENT.value})")
    yield
    logging.warning('Shutting down..')


def create_app() -> FastAPI:
    app = FastAPI(title="OracleMarket", lifespan=lifespan)

    if config.SECURITY_HEADERS_ENABLED:
        app.add_middleware(SecurityHeadersMiddleware)
        logging.info("[Startup] Security headers middleware enabled")

    if config.CSP_ENABLED:
        app.add_middleware(CSPMiddleware)
        logging.info("[Startup] Content Security Policy middleware enabled")

    if config.CORS_ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ALLOWED_ORIGINS,
            allow_credentials=False,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
            allow_headers=["Content-Type", "Authorization", "Accept-Language", "X-Client-Id"],
        )
        logging.info(f"[Startup] CORS middleware enabled for origins: {config.CORS_ALLOWED_ORIGINS}")
    else:
        logging.debug("[Startup] CORS middleware disabled (no allowed origins configured)")

    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    @app.exception_handler(MarketplaceException)
    async def marketplace_exception_handler(request: Request, exc: MarketplaceException):
        lang = Localizator.resolve_language(request.headers.get("Accept-Language"))
        return JSONResponse(
            status_code=get_http_status(exc),
            content={"detail": build_error_notice(exc, lang)},
        )

    @app.exception_handler(Exception)
    async def exception_handler(request: Request, exc: Exception):
        lang = Localizator.resolve_language(request.headers.get("Accept-Language"))
        return JSONResponse(
            status_code=500,
            content={"detail": build_error_notice(exc, lang)},
        )

    return app


app = create_app()


def main() -> None:
    uvicorn.run(app, host=config.WEBAPP_HOST, port=config.WEBAPP_PORT)
