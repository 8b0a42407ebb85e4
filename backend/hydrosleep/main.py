"""
Application FastAPI principale pour HydroSleep
Point d'entree de l'API backend (eau, sommeil, objectifs, analytics)
"""
import logging
from logging.handlers import RotatingFileHandler
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.requests import Request
from starlette.middleware.base import BaseHTTPMiddleware
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
import sentry_sdk

from hydrosleep.core.settings import get_settings
from hydrosleep.core.errors import HydroSleepError, StorageError
from hydrosleep.api.routers import router, limiter
from hydrosleep.core.database import create_db_and_tables
from hydrosleep.core.redis import check_redis_health

API_VERSION = "1.0.0"

settings = get_settings()

# Initialiser Sentry (uniquement si SENTRY_DSN est configure)
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=0.2 if settings.ENVIRONMENT == "production" else 1.0,
        send_default_pii=False,
    )

# Logging conditionne par ENVIRONMENT
_log_level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

_handler = logging.StreamHandler(sys.stdout)

if settings.ENVIRONMENT == "production":
    from pythonjsonlogger import jsonlogger
    _handler.setFormatter(jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level"},
    ))
else:
    _handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))

_handlers: list[logging.Handler] = [_handler]
if settings.ENVIRONMENT == "development":
    _handlers.append(RotatingFileHandler(
        'hydrosleep.log', maxBytes=5_000_000, backupCount=3,
    ))

logging.basicConfig(
    level=_log_level,
    handlers=_handlers,
)

if settings.ENVIRONMENT == "production":
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestionnaire de cycle de vie de l'application"""
    logger.info(f"Demarrage de HydroSleep API v{API_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    create_db_and_tables()
    logger.info("Base de donnees initialisee")

    redis_ok = check_redis_health()
    if redis_ok is None:
        logger.info("Redis non configure, rate limiting en memoire")
    elif redis_ok:
        logger.info("Redis connecte")
    else:
        logger.warning("Redis non disponible, le rate limiting partage est degrade")

    yield

    logger.info("Arret de HydroSleep API")


app = FastAPI(
    title="HydroSleep API",
    description="API de suivi de l'hydratation, du sommeil et des objectifs hebdomadaires",
    version=API_VERSION,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan
)

# Rate limiting
app.state.limiter = limiter


async def _custom_rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Retourne un 429 avec headers Retry-After et X-RateLimit-*."""
    response = JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests",
            "message": f"Rate limit exceeded: {exc.detail}",
        },
    )
    response = request.app.state.limiter._inject_headers(
        response, request.state.view_rate_limit
    )
    return response


app.add_exception_handler(RateLimitExceeded, _custom_rate_limit_handler)

# Middlewares de securite en production
if settings.ENVIRONMENT == "production":
    class HTTPSRedirectMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next):
            if request.headers.get("x-forwarded-proto") == "http":
                url = request.url.replace(scheme="https")
                return RedirectResponse(url, status_code=301)
            return await call_next(request)

    class SecurityHeadersMiddleware(BaseHTTPMiddleware):
        """Ajoute les headers de securite sur toutes les reponses en production."""
        async def dispatch(self, request: Request, call_next):
            response = await call_next(request)
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains"
            response.headers["X-Content-Type-Options"] = "nosniff"
            response.headers["X-Frame-Options"] = "DENY"
            return response

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(HTTPSRedirectMiddleware)

# Configuration CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1")


@app.get("/health")
@limiter.exempt
async def health_check():
    """Point de sante de l'API"""
    redis_ok = check_redis_health()
    if redis_ok is None:
        redis_status = "not_configured"
    else:
        redis_status = "connected" if redis_ok else "disconnected"
    return JSONResponse(
        content={
            "status": "degraded" if redis_ok is False else "healthy",
            "version": API_VERSION,
            "environment": settings.ENVIRONMENT,
            "services": {
                "redis": redis_status,
            },
        }
    )


@app.exception_handler(HydroSleepError)
async def hydrosleep_exception_handler(request: Request, exc: HydroSleepError):
    """Erreurs metier : code HTTP porte par la classe d'erreur"""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, **exc.details},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    """Echec de persistance : journalise, reponse generique"""
    logger.error(f"Erreur de stockage: {type(exc).__name__}: {str(exc)}", exc_info=True)
    error = StorageError("Storage failure")
    return JSONResponse(status_code=error.status_code, content={"detail": error.message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc):
    """Gestionnaire global des exceptions"""
    logger.error(f"Erreur non geree: {type(exc).__name__}: {str(exc)}", exc_info=True)
    if settings.DEBUG:
        content = {
            "detail": "Internal server error",
            "type": type(exc).__name__,
            "message": str(exc),
        }
    else:
        content = {
            "detail": "Internal server error",
            "message": "An unexpected error occurred",
        }
    return JSONResponse(status_code=500, content=content)


if __name__ == "__main__":
    import uvicorn
    logger.info("Lancement de l'application sur le port 8000")
    uvicorn.run(
        "hydrosleep.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
