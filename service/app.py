"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import load_config
from core.errors import BaseCodecError, InvalidArgument
from ids.issuer import IdIssuer
from internal.health import (
    HealthChecker,
    check_clock,
    check_codec,
    check_event_loop,
    create_audit_check,
)
from internal.logging import get_logger, LogLevel, StructuredLogger, AuditLog
from service import auth
from service.routes import api, encoding, health, identifiers
from utils.crash import create_async_handler

VERSION = "1.0.0"


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    StructuredLogger.configure(min_level=LogLevel.from_name(config.logging.level))
    logger_instance = get_logger()

    # Create core components
    audit_log = AuditLog(config.logging.file)
    issuer = IdIssuer(max_batch=config.ids.max_batch, sink=audit_log.record)
    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("codec", check_codec, critical=True)
    health_checker.register("clock", check_clock, critical=True)
    health_checker.register("audit_log", create_audit_check(audit_log), critical=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger_instance.info("Application starting", version=VERSION)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))

        await audit_log.start()
        logger_instance.info("Application started successfully")

        yield

        # Shutdown
        logger_instance.info("Application shutting down")
        await audit_log.stop()
        logger_instance.info("Application shutdown complete", **issuer.get_stats())

    app = FastAPI(
        title="basekit",
        version=VERSION,
        description="Base-N codecs and time-ordered identifiers",
        lifespan=lifespan,
    )
    app.state.issuer = issuer
    app.state.audit_log = audit_log

    @app.exception_handler(BaseCodecError)
    async def codec_error_handler(request: Request, exc: BaseCodecError):
        status_code = 422 if isinstance(exc, InvalidArgument) else 400
        logger_instance.warn("Request rejected", error=exc, path=request.url.path, status=status_code)
        return JSONResponse(content=exc.to_dict(), status_code=status_code)

    # Initialize route modules with dependencies
    auth.init(config.auth)
    identifiers.init(issuer)
    api.init(issuer, audit_log)
    health.init(issuer, health_checker)

    # Include routers
    app.include_router(identifiers.router)
    app.include_router(encoding.router)
    app.include_router(api.router)
    app.include_router(health.router)

    return app
