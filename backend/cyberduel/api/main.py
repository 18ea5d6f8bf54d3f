"""
FastAPI Application Configuration

This module contains the main FastAPI application setup with:
- CORS middleware
- API routes
- Error handling
- Server entry point
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..core import GameError, GameConfig
from ..session import GameSession

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000


def get_port() -> int:
    """Listening port from the PORT environment variable"""
    return int(os.environ.get("PORT", DEFAULT_PORT))


def get_host() -> str:
    return os.environ.get("HOST", "0.0.0.0")


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events"""
    # Startup
    logger.info("Starting Cyber Duel API...")
    app.state.session = GameSession(config=GameConfig())

    yield

    # Shutdown
    logger.info("Shutting down...")


# =============================================================================
# Create FastAPI Application
# =============================================================================

app = FastAPI(
    title="Cyber Duel API",
    description="""
    API for Cyber Duel - a turn-based attacker vs defender contest
    over a network's security level, with a MinMax AI defender.

    ## Features
    - Start a new game and fetch the move catalogs
    - Submit attacker moves
    - Let the AI pick and apply the defender's move
    - Inspect the event log and the AI's last search
    """,
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)


# =============================================================================
# CORS Configuration
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Import and Include Routers
# =============================================================================

from .routes import game  # noqa: E402

app.include_router(game.router, prefix="/api/game", tags=["Game"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint with welcome message and links"""
    return {
        "message": "Welcome to Cyber Duel API",
        "version": "0.1.0",
        "documentation": "/api/docs",
        "health": "/health",
        "endpoints": {
            "game": "/api/game",
        }
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "service": "cyberduel-api",
        "version": "0.1.0"
    }


# =============================================================================
# Error Handlers
# =============================================================================

@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Custom HTTP exception handler"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "status_code": exc.status_code
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request, exc):
    """Malformed bodies are rejected like moves that do not resolve"""
    errors = exc.errors()
    detail = errors[0].get("msg", "malformed request") if errors else "malformed request"
    prefix = "Invalid attack" if request.url.path.endswith("/attack") else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={
            "error": f"{prefix}: {detail}",
            "status_code": 400
        }
    )


@app.exception_handler(GameError)
async def game_error_handler(request, exc):
    """Rejected moves are client errors"""
    return JSONResponse(
        status_code=400,
        content={
            "error": exc.message,
            "type": type(exc).__name__,
            "status_code": 400
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle all unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "status_code": 500
        }
    )


# =============================================================================
# Entry Point
# =============================================================================

def run(host: str = None, port: int = None):
    """Serve the API with uvicorn"""
    import uvicorn

    uvicorn.run(app, host=host or get_host(), port=port or get_port())


if __name__ == "__main__":
    run()
