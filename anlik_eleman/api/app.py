"""
FastAPI application.

The process holds one signed-in session, so every caller acts as that user.
Serve it on the loopback interface only:

    uvicorn anlik_eleman.api.app:app --host 127.0.0.1
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from anlik_eleman.api.limiter import limiter
from anlik_eleman.auth import PlatformAuthGateway, SessionStore, online_check_for
from anlik_eleman.config import settings
from anlik_eleman.logging_setup import configure_logging
from anlik_eleman.remote import PlatformClient

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in settings.allowed_hosts.split(",") if h.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the platform client and restore the session on startup."""
    configure_logging(settings.log_level)
    client = PlatformClient(settings)
    store = SessionStore(PlatformAuthGateway(client), online_check=online_check_for(client.url))
    app.state.client = client
    app.state.store = store

    await store.init()
    logger.info(f"Auth ready: {store.state.phase.value}")
    try:
        yield
    finally:
        store.dispose()
        await client.aclose()


app = FastAPI(
    title="Anlık Eleman API",
    description="Casual job board: postings, applications and messaging",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Çok fazla istek: {exc.detail}"},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=ALLOWED_HOSTS)


# Import and include routers
from anlik_eleman.api.routes import (  # noqa: E402
    applications,
    auth,
    companies,
    dashboard,
    favorites,
    jobs,
    messages,
    notifications,
    reviews,
)

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(jobs.router, prefix="/jobs", tags=["Jobs"])
app.include_router(applications.router, prefix="/applications", tags=["Applications"])
app.include_router(favorites.router, prefix="/favorites", tags=["Favorites"])
app.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
app.include_router(messages.router, prefix="/messages", tags=["Messages"])
app.include_router(companies.router, prefix="/companies", tags=["Companies"])
app.include_router(reviews.router, prefix="/reviews", tags=["Reviews"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "platform_configured": settings.is_configured}
