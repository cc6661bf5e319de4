"""FastAPI application entry point."""

import time
import warnings
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.logging import RequestLog, log_request
from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import (
    assistant_router,
    calendar_router,
    events_router,
    health_router,
    requests_router,
    session_router,
)
from core.config import (
    ADMIN_PASSPHRASE,
    API_DEBUG,
    API_VERSION,
    FACILITY_NAME,
    MAX_ADMIN_SESSIONS,
)
from core.database import create_request_log_tables
from core.session import SessionRegistry
from services.assistant import AssistantGate
from services.store import FacilityStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: seed the schedule once; all state lives in memory from here on
    app.state.store = FacilityStore.seeded(date.today().year)
    app.state.sessions = SessionRegistry(ADMIN_PASSPHRASE, MAX_ADMIN_SESSIONS)
    app.state.assistant_gate = AssistantGate()

    if not ADMIN_PASSPHRASE:
        warnings.warn("ADMIN_PASSPHRASE is not set; staff login is disabled")

    try:
        create_request_log_tables()
    except Exception as e:
        warnings.warn(f"Request log database unavailable: {e}")

    yield


app = FastAPI(
    title=FACILITY_NAME,
    description="Facility calendar for maintenance, cleaning and events with guest requests and admin approval",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Record every API request in the SQLite request log."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint=request.url.path,
        method=request.method,
        client_ip=get_client_ip(request),
        role="viewer",
    )
    request.state.request_log = request_log

    try:
        response = await call_next(request)
        request_log.status_code = response.status_code
        return response
    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        raise
    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        # Always log the request, but don't fail it if logging fails
        try:
            log_request(request_log)
        except Exception as e:
            warnings.warn(f"Failed to write request log: {e}")


@app.exception_handler(StarletteHTTPException)
async def logged_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Copy error code/message into the request log, then respond as usual."""
    request_log = getattr(request.state, "request_log", None)
    if request_log is not None:
        if isinstance(exc.detail, dict):
            request_log.error_code = exc.detail.get("code")
            request_log.error_message = exc.detail.get("error")
            detail_type = "validation_error" if exc.status_code == 422 else "warning"
            for detail in exc.detail.get("details", []):
                request_log.details.append((detail_type, detail))
        else:
            request_log.error_message = str(exc.detail)
    return await http_exception_handler(request, exc)


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(session_router)
app.include_router(calendar_router)
app.include_router(events_router)
app.include_router(requests_router)
app.include_router(assistant_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
