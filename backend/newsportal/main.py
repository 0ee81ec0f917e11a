"""News portal: FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from newsportal import models  # noqa: F401  (registers tables on Base.metadata)
from newsportal.config import settings
from newsportal.database import Base, SessionLocal, engine
from newsportal.errors import PortalError
from newsportal.middleware.rate_limit import limiter
from newsportal.routers import admin, articles, auth, categories, dev, settings as settings_router, users
from newsportal.services.article_service import ensure_default_categories

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("newsportal")

# ── CORS origins from env ────────────────────────────────────────────────────
_cors_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]


def init_db():
    """Create tables and seed default categories."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_default_categories(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("News portal API ready")
    yield


app = FastAPI(
    title="News Portal API",
    description="Articles, comments with auto-moderation, and staff tooling.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error translation ────────────────────────────────────────────────────────
# Every error body is {"message": ...}.

@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Input tidak valid"
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Terjadi kesalahan server"})


# Routers
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(articles.router)
app.include_router(admin.router)
app.include_router(users.router)
app.include_router(settings_router.router)
app.include_router(dev.router)


@app.get("/")
def root():
    return {
        "name": "News Portal API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "ok"}
