# lockerhub/main.py
"""
FastAPI application entry point.
Includes security middleware, global error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from lockerhub.routers import auth, users, packages, lockers, sessions, logs, courier, stats, health
from lockerhub.database import create_tables, store
from lockerhub.services.seed_service import seed_demo_data
from lockerhub.config import settings
from lockerhub.errors import ErrorCode
from lockerhub.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="LockerHub API",
    description="Parcel locker backend — package assignment, delivery, pickup, and fleet monitoring.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (allow the dashboard to call the API) ──────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Restrict to dashboard origin in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth for every endpoint except health and docs.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    async def dispatch(self, request: Request, call_next):
        open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}
        if request.url.path in open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"success": False, "error": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Request Validation → envelope ────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    logger.warning(f"Invalid request on {request.url.path}: {problems}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"success": False, "error": problems, "error_code": ErrorCode.VALIDATION_ERROR.value},
    )


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(auth.router,     prefix="/api/v1", tags=["Auth"])
app.include_router(users.router,    prefix="/api/v1", tags=["Users"])
app.include_router(packages.router, prefix="/api/v1", tags=["Packages"])
app.include_router(lockers.router,  prefix="/api/v1", tags=["Lockers"])
app.include_router(sessions.router, prefix="/api/v1", tags=["Sessions"])
app.include_router(logs.router,     prefix="/api/v1", tags=["Audit Logs"])
app.include_router(courier.router,  prefix="/api/v1", tags=["Courier"])
app.include_router(stats.router,    prefix="/api/v1", tags=["Stats"])
app.include_router(health.router,   prefix="/api/v1", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("LockerHub backend starting up...")
    create_tables()
    logger.info(f"Store ready ({settings.DATABASE_URL})")
    if settings.SEED_DEMO_DATA:
        counts = await seed_demo_data(store)
        logger.info(f"Demo data loaded: {counts}")
    logger.info(f"Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("LockerHub backend shutting down...")
