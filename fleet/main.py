# fleet/main.py
"""
FastAPI application entry point.
Includes request logging middleware, global error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from fleet.routers import auth, vehicles, documents, maintenances, exchanges, users, health
from fleet.database import create_tables
from fleet.config import settings
from fleet.exceptions import FleetError, ValidationError
from fleet.utils.logger import get_logger
from fleet.utils.validation import error_map
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Fleet API",
    description="Vehicles, their documents and maintenance, and chauffeur vehicle exchanges.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(FleetError)
async def fleet_error_handler(request: Request, exc: FleetError):
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = ValidationError(error_map(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail},
                        headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(auth.router,         prefix=settings.API_PREFIX, tags=["Authentication"])
app.include_router(vehicles.router,     prefix=settings.API_PREFIX, tags=["Vehicles"])
app.include_router(documents.router,    prefix=settings.API_PREFIX, tags=["Vehicle Documents"])
app.include_router(maintenances.router, prefix=settings.API_PREFIX, tags=["Maintenances"])
app.include_router(exchanges.router,    prefix=settings.API_PREFIX, tags=["Vehicle Exchanges"])
app.include_router(users.router,        prefix=settings.API_PREFIX, tags=["Users"])
app.include_router(health.router,       prefix=settings.API_PREFIX, tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Fleet API starting up...")
    create_tables()
    logger.info("Database tables ready")
    logger.info(f"File storage at {settings.STORAGE_ROOT}")
    logger.info(f"Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Fleet API shutting down...")
