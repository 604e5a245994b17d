"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers API routes (auth, order, admin) and the uploads mount
- No business logic should be written here
- Manages application lifecycle (startup/shutdown)
"""

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import time

from app.core.config import Settings, settings as default_settings, validate_settings
from app.core.context import AppContext, build_context, get_context
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.db.mongo import check_database_health
from app.api import admin, auth, order

logger = get_logger(__name__)

APP_VERSION = "1.0.0"


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Builds the order API. The application context is created in the
    lifespan and stored on app.state.context.
    """
    config = config or default_settings
    setup_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Starting PickupDesk order API...")

        try:
            validate_settings(config)
            logger.info("✅ Configuration validated")
        except Exception as e:
            logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
            raise

        context = await build_context(config)
        app.state.context = context

        if context.db_connected:
            logger.info("🎉 PickupDesk started successfully!")
        else:
            logger.warning("⚠️ PickupDesk started in degraded mode (no database)")
        logger.info(f"Environment: {config.ENVIRONMENT}")

        yield  # Application runs here

        logger.info("🛑 Shutting down PickupDesk...")
        await context.close()
        logger.info("👋 PickupDesk shut down successfully")

    app = FastAPI(
        title="PickupDesk - Laundry Pickup Orders",
        description="Mobile OTP login, pickup orders with photos, and order administration",
        version=APP_VERSION,
        lifespan=lifespan,
        debug=config.DEBUG,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > 5.0:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={"process_time": process_time}
            )

        return response

    add_exception_handlers(app, config)

    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(order.router, prefix="/api/order", tags=["Orders"])
    app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])

    upload_dir = Path(config.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint - basic info."""
        return {
            "name": "PickupDesk API",
            "version": APP_VERSION,
            "status": "running",
            "environment": config.ENVIRONMENT
        }

    @app.get("/health", tags=["Health"])
    async def health_check(ctx: AppContext = Depends(get_context)):
        """
        Checks database connectivity.
        """
        db_healthy = await check_database_health(ctx.client)
        health_status = {
            "status": "healthy" if db_healthy else "degraded",
            "timestamp": time.time(),
            "environment": config.ENVIRONMENT,
            "version": APP_VERSION,
            "checks": {"database": "healthy" if db_healthy else "unhealthy"}
        }
        return JSONResponse(content=health_status, status_code=200 if db_healthy else 503)

    @app.get("/live", tags=["Health"])
    async def liveness_check():
        """
        Liveness probe - indicates if app is alive.
        """
        return {"status": "alive"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=default_settings.PORT,
        reload=default_settings.is_development,
        log_level=default_settings.LOG_LEVEL.lower()
    )
