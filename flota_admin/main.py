"""
Punto de entrada FastAPI / FastAPI entry point.
Flota Admin - libro de operaciones de combustible / fuel operation ledger.
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from flota_admin.api import api_router
from flota_admin.config import settings
from flota_admin.database import init_db
from flota_admin.exceptions import FleetError, LedgerStorageError
from flota_admin.rate_limit import limiter

logger = logging.getLogger("flota_admin")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicio y cierre / Startup and shutdown."""
    # Crear las tablas al arrancar / Create tables on startup
    await init_db()
    logger.info("%s %s ready", settings.APP_NAME, settings.APP_VERSION)
    yield


# Swagger solo en desarrollo / Swagger only in development
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Panel de flota: libro de combustible / Fleet dashboard: fuel ledger",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def fleet_error_handler(request: Request, exc: FleetError) -> JSONResponse:
    """Errores de dominio a JSON {message} / Domain errors rendered as {message}.

    Los fallos internos anaden 'error': el tipo de excepcion,
    o el texto completo en DEBUG.
    """
    body: dict = {"message": exc.message}
    if isinstance(exc, LedgerStorageError):
        body["error"] = _describe(exc.cause)
    return JSONResponse(status_code=exc.status_code, content=body)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Cualquier otro fallo: 500 {message, error} / Any other failure: 500 {message, error}."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "error": _describe(exc)},
    )


def _describe(exc: Exception) -> str:
    """Tipo de la excepcion, o el texto completo en DEBUG / Exception type, full text in DEBUG."""
    return str(exc) if settings.DEBUG else type(exc).__name__


app.add_exception_handler(FleetError, fleet_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With", "X-Request-ID"],
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Anade las cabeceras de seguridad / Add security headers."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Anade un X-Request-ID unico a cada peticion / Add unique X-Request-ID to each request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)


# Rutas API
app.include_router(api_router)


# Salud de la API / API health check
@app.get("/api/")
async def api_health():
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}


# Logging JSON estructurado en produccion / Structured JSON logging in production
if not settings.DEBUG:
    import json

    class JSONFormatter(logging.Formatter):
        def format(self, record):
            log_entry = {
                "timestamp": self.formatTime(record),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info and record.exc_info[0]:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(logging.INFO)
