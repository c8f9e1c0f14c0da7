# app/main.py
import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.database import settings
from app.init_db import init_database
from app.services.errors import AssetTrackingError

# Routers
from app.routers import health_router, users_router, zones_router
from app.routers import sensors_router, devices_router, readings_router

logger = logging.getLogger(__name__)


def _error_body(exc: Exception, body: dict) -> dict:
    # internals only leave the process outside production
    if not settings.is_production:
        cause = exc.__cause__ or exc
        body["cause"] = str(cause)
        body["stack"] = traceback.format_exception(type(cause), cause, cause.__traceback__)
    return body


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="IoT Asset Tracking API",
        description="CRUD API for users, zones, sensors, devices and sensor readings",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AssetTrackingError)
    async def asset_tracking_error_handler(request: Request, exc: AssetTrackingError):
        if exc.status_code >= 500:
            logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
            body = _error_body(exc, {"error": exc.kind, "detail": "Internal server error"})
        else:
            body = exc.to_dict()
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(body))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        body = _error_body(exc, {"error": "internal_error", "detail": "Internal server error"})
        return JSONResponse(status_code=500, content=jsonable_encoder(body))

    # Mount router
    app.include_router(health_router)            # /healthz, /api/v1/health
    app.include_router(users_router)             # /api/v1/users/...
    app.include_router(zones_router)             # /api/v1/zones/...
    app.include_router(sensors_router)           # /api/v1/sensors/...
    app.include_router(devices_router)           # /api/v1/devices/...
    app.include_router(readings_router)          # /api/v1/readings/...

    # Startup: DB connection + tables (+ demo data), idempotent
    @app.on_event("startup")
    def _startup():
        init_database()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
