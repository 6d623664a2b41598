# backend/vehicle_rental/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import time
import logging

from .api.v1 import vehicles
from .core.config import Settings, settings as default_settings
from .core.database import Base, build_engine, build_session_factory
from .models import vehicle_model  # noqa: F401  registers the vehicles table

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Builds the API for the given settings; nothing process-wide is mutated except logging."""
    settings = settings or default_settings

    # Setup Logging
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = FastAPI(
        title=settings.APP_NAME,
        description="Resource management API for a fleet of rentable vehicles",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Database setup, tables are created on first boot
    engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    Base.metadata.create_all(bind=engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API Routers
    logger.info("Registering API routers...")

    app.include_router(
        vehicles.router,
        prefix="/api/v1/vehicles",
        tags=["Vehicles"]
    )

    # Root Endpoint
    @app.get("/", tags=["System"])
    def read_root():
        """Welcome endpoint with API information"""
        return {
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "operational",
            "documentation": "/docs",
            "health_check": "/health",
        }

    # Health Check Endpoint
    @app.get("/health", tags=["System"])
    def health_check():
        """Checks that the database answers"""
        try:
            with app.state.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            db_status = "connected"
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            db_status = f"error: {str(e)}"

        return {
            "status": "healthy" if db_status == "connected" else "degraded",
            "service": settings.APP_NAME,
            "timestamp": time.time(),
            "components": {
                "database": db_status,
            }
        }

    # Startup Event
    @app.on_event("startup")
    async def startup_event():
        """Log the registered endpoints"""
        for route in app.routes:
            if hasattr(route, "methods"):
                methods = ", ".join(sorted(route.methods))
                logger.info(f"   {methods:8} {route.path}")
        logger.info(f"{settings.APP_NAME} is ready")

    # Request Logging Middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests"""
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} "
            f"- Status: {response.status_code} "
            f"- Time: {process_time:.3f}s"
        )

        return response

    # Error Handlers
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed payloads get the same envelope as other client errors"""
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": "Invalid request payload",
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            detail = f"The endpoint {request.url.path} does not exist"
        else:
            detail = exc.detail
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "message": "Not Found" if exc.status_code == 404 else "Request failed",
                "errors": detail,
            },
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Internal server error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Internal Server Error",
                "errors": "An unexpected error occurred",
            },
        )

    return app


app = create_app()
