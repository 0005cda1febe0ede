"""
Campus Placement Portal - Main Application

FastAPI backend with:
- Relational storage through SQLAlchemy (PostgreSQL in production)
- JWT authentication with per-request role lookup
- Role-scoped access to job offers, applications and profiles

Run: uvicorn placement_portal.main:app --reload
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from placement_portal import __version__
from placement_portal.api.routes import api_router
from placement_portal.core.config import get_settings
from placement_portal.core.exceptions import PlacementError
from placement_portal.core.logging_config import configure_logging
from placement_portal.db.database import init_db

settings = get_settings()
configure_logging()

# Create FastAPI app
app = FastAPI(
    title="Campus Placement Portal",
    description="""
    College placement platform API.

    ## Features
    - **Authentication**: JWT-based auth for students, organizations and admins
    - **Job offers**: Public search; organizations manage their own offers
    - **Applications**: Students apply once per offer; organizations and admins set status
    - **Profiles**: Student profile with education and experience
    - **Notifications & events**: Application notifications, placement events
    - **Dashboard**: Role-aggregated counts
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# ERROR HANDLERS - every error body is {"message": ...}
# ============================================================

@app.exception_handler(PlacementError)
async def placement_error_handler(request: Request, exc: PlacementError):
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    missing = any(e.get("type") == "missing" for e in errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Missing required fields" if missing else "Invalid request", "errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler"""
    logger.opt(exception=exc).error(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create missing tables on startup."""
    try:
        init_db()
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Campus Placement Portal", "message": "API is running."}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    from placement_portal.db.database import test_database_connection

    return {
        "status": "healthy",
        "database": "connected" if test_database_connection() else "disconnected",
    }
