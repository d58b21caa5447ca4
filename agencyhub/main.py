import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agencyhub.core.config import get_settings
from agencyhub.services.upstream import InMemoryResponseCache

settings = get_settings()

app = FastAPI(
    title=settings.project_name,
    openapi_url=f"{settings.api_v1_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Shared by every request-scoped upstream client
app.state.response_cache = InMemoryResponseCache(ttl_seconds=settings.cache_ttl_seconds)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
from agencyhub.api.v1 import api_router
app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "name": settings.project_name,
        "docs": "/docs",
        "upstream": settings.upstream_base_url,
    }


@app.on_event("startup")
async def startup_event():
    """Initialize logging on startup."""
    logging.basicConfig(level=getattr(logging, settings.log_level))
    logging.info(f"Reading AgencyHub data from {settings.upstream_base_url}")


@app.on_event("shutdown")
async def shutdown_event():
    """Drop cached upstream payloads on shutdown."""
    app.state.response_cache.clear()
