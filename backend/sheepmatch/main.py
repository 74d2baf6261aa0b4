"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .api.routes import levels, sessions

# Get settings
settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Layered tile-matching puzzle: seeded level generation, occlusion and slot matching",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(levels.router)
app.include_router(sessions.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "SheepMatch API",
        "endpoints": {
            "level": "/api/levels/{level}",
            "clickable": "/api/levels/clickable",
            "sessions": "/api/sessions",
            "session": "/api/sessions/{session_id}",
            "click": "/api/sessions/{session_id}/click",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    # Sessions live in process memory, so a single worker
    uvicorn.run(
        "sheepmatch.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
