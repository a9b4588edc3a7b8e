# File: app/main.py
import time
import logging
from typing import Callable
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from app.api.v1.api import api_router
from app.core.config import settings
from app.core.exceptions import FeedbackAppError, PersistenceError
from app.db.database import engine

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

allowed_origins = settings.cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    # Browsers refuse credentials on a wildcard origin
    allow_credentials=allowed_origins != ["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"],
    allow_headers=["Authorization", "Content-Type"],
    expose_headers=["X-Process-Time"],
    max_age=3600,
)

# Request logging middleware (AFTER CORS)
@app.middleware("http")
async def log_requests(request: Request, call_next: Callable) -> Response:
    """Log all requests with timing"""
    start_time = time.time()
    client = request.client.host if request.client else "unknown"

    logger.info(f"{request.method} {request.url.path} from {client}")
    if request.query_params:
        logger.debug(f"   Query: {dict(request.query_params)}")

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"{request.method} {request.url.path} - "
            f"Error: {str(e)} - "
            f"Time: {process_time:.4f}s"
        )
        logger.exception("Full error traceback:")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "path": request.url.path,
                "method": request.method
            },
        )

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(FeedbackAppError)
async def feedback_app_error_handler(request: Request, exc: FeedbackAppError) -> JSONResponse:
    if isinstance(exc, PersistenceError):
        logger.error(f"Persistence failure on {request.url.path}: {exc.details}")
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_code": exc.error_code},
        headers=exc.headers,
    )


# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    return {
        "message": f"{settings.PROJECT_NAME} is running",
        "environment": settings.ENVIRONMENT,
        "docs": "/docs",
    }


@app.get("/health")
def health_check():
    """Health check with database connectivity"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "connected"
    except Exception as e:
        logger.error(f"Health check database error: {e}")
        database = "unavailable"

    return {
        "status": "healthy" if database == "connected" else "degraded",
        "database": database,
        "environment": settings.ENVIRONMENT,
        "timestamp": time.time(),
    }


@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT})")
    if settings.is_development and settings.DATABASE_URL.startswith("sqlite"):
        # Local SQLite databases are created on the fly; other backends use alembic
        from app.db.database import Base
        from app import models  # noqa: F401
        Base.metadata.create_all(bind=engine)
        logger.info("Created SQLite tables for development")
