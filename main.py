"""
Main FastAPI application (entrypoint).

Responsibilities:
- Wire API routers (drivers / schedules / bookings)
- Register centralized exception handlers
- Provide middleware: CORS, request-id logging
- Add health / readiness endpoints
- Own the Redis handle: created with the app, connected on startup, closed on shutdown
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import logging
import uvicorn

from api import routes_drivers, routes_schedules, routes_bookings
from config.settings import Settings, settings as default_settings
from core.exception_handlers import register_exception_handlers
from core.logging import configure_logging, request_logging_middleware
from core.response import error as resp_error
from infra.redis_client import RedisClient
from services.booking_service import utc_timestamp

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[RedisClient] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.API_TITLE, version=settings.API_VERSION)
    app.state.settings = settings
    app.state.store = store or RedisClient(settings.REDIS_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(routes_drivers.router, tags=["drivers"])
    app.include_router(routes_schedules.router, tags=["schedules"])
    app.include_router(routes_bookings.router, tags=["bookings"])

    register_exception_handlers(app)

    # Add request logging middleware (adds X-Request-ID header and logs)
    app.middleware("http")(request_logging_middleware)

    @app.get("/health")
    async def health():
        """Liveness only; does not touch Redis."""
        return {"status": "Server is running", "timestamp": utc_timestamp()}

    @app.get("/ready")
    async def ready():
        """Readiness: check Redis connectivity."""
        try:
            await app.state.store.ping()
            return {"ready": True}
        except Exception as e:
            logger.warning("Readiness check failed: %s", e)
            return JSONResponse(status_code=503, content=resp_error(code="store_unreachable", message="Redis unavailable"))

    @app.on_event("startup")
    async def on_startup():
        await app.state.store.connect()
        logger.info("========================================")
        logger.info("Bus Booking Backend Server")
        logger.info("Server running on port %s", settings.PORT)
        logger.info("Environment: %s", settings.ENVIRONMENT)
        logger.info("Redis URL: %s", "Connected" if settings.redis_url_configured else "Local")
        logger.info("========================================")

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.store.disconnect()

    return app


app = create_app()

if __name__ == "__main__":
    # Run with: python main.py for local dev. For production use uvicorn with workers.
    uvicorn.run("main:app", host=default_settings.HOST, port=default_settings.PORT)
