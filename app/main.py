# app/main.py
"""
FastAPI application entry point.
Includes CORS, request timing, error handlers for the car service errors, and all routers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from app.routers import cars, health
from app.database import Database
from app.config import settings
from app.services.errors import CarServiceError, StorageError
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)


def create_app(database: Database = None) -> FastAPI:
    """Build the API around an explicitly owned Database (a fresh one from settings if not given)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 CMTracker Backend starting up...")
        db = database or Database()
        if not db.check_connection():
            logger.error("🛑 Startup aborted: database unreachable. Check DATABASE_URL and that the server is running.")
            raise RuntimeError("Database unreachable")
        db.create_tables()
        app.state.database = db
        logger.info("✅ Database tables ready")
        logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
        logger.info("📖 API docs at /api-docs")

        yield

        logger.info("🛑 CMTracker Backend shutting down...")
        db.dispose()

    app = FastAPI(
        title="Car Data API",
        description="CRUD for vehicle-finance records (license plate, finance status, balances).",
        version="1.1.0",
        docs_url="/api-docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # ── CORS (mobile client + web tools call the API cross-origin) ──────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Request Timing Middleware ──────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
        return response

    # ── Car Service Errors ─────────────────────────────────────────────────
    @app.exception_handler(CarServiceError)
    async def car_service_error_handler(request: Request, exc: CarServiceError):
        if isinstance(exc, StorageError):
            logger.error(f"Storage error on {request.method} {request.url.path}: {exc.detail}")
            detail = exc.public_detail
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.detail}")
            detail = exc.detail
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message, "detail": detail})

    # ── Global Exception Handler ───────────────────────────────────────────
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Server Error", "detail": "Internal server error"},
        )

    # ── Routers ────────────────────────────────────────────────────────────
    app.include_router(cars.router,   prefix="/api", tags=["🚗 Cars"])
    app.include_router(health.router, prefix="/api", tags=["💚 Health"])

    return app


app = create_app()
