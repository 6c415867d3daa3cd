"""
FastAPI application entry point.
Includes security middleware, ledger error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from parking_ledger.routers import plates, hourly, subscriptions, price_config, occupancy, health
from parking_ledger.database import create_tables
from parking_ledger.dependencies import init_ledger
from parking_ledger.exceptions import CapacityError, LedgerError
from parking_ledger.config import settings
from parking_ledger.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Parking Ledger API",
    description="Hourly and subscription parking: entries, billing, renewals, capacity.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (operator devices on the same LAN) ─────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth.
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
                content={"detail": "Invalid or missing API key"},
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


# ── Ledger Error Handler ─────────────────────────────────────────────────────
@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    content = {"detail": exc.message, "error": type(exc).__name__}
    if isinstance(exc, CapacityError):
        content.update(
            vehicle_type=getattr(exc.vehicle_type, "value", exc.vehicle_type),
            current_count=exc.current_count,
            limit=exc.limit,
        )
    logger.warning(f"{request.method} {request.url.path} rejected: {type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=content)


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(plates.router,        prefix="/api/v1", tags=["Plates"])
app.include_router(hourly.router,        prefix="/api/v1", tags=["Hourly Parking"])
app.include_router(subscriptions.router, prefix="/api/v1", tags=["Subscriptions"])
app.include_router(price_config.router,  prefix="/api/v1", tags=["Price Table"])
app.include_router(occupancy.router,     prefix="/api/v1", tags=["Occupancy & Revenue"])
app.include_router(health.router,        prefix="/api/v1", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Parking Ledger starting up...")
    create_tables()
    logger.info("Storage table ready")
    ledger = await init_ledger()
    counts = {t.value: n for t, n in ledger.occupancy().items()}
    logger.info(f"Occupancy at startup: {counts}")
    logger.info(f"Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Parking Ledger shutting down...")
