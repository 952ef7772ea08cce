"""
Maze Chase HTTP API

Serves live games (the player drives the evader, the minimax pursuer
answers) and stateless pursuer decisions on posted snapshots. Every error,
including request validation, is returned as {"error", "status_code"}.
"""

from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from .. import __version__
from ..ai import MAX_SEARCH_DEPTH
from ..core import MazeAlgorithm

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Maze Chase API %s starting (algorithms: %s, max search depth %d)",
                __version__, ", ".join(str(a) for a in MazeAlgorithm), MAX_SEARCH_DEPTH)
    yield
    logger.info("Maze Chase API stopped")


app = FastAPI(
    title="Maze Chase API",
    description="""
    Turn-based pursuit in a grid maze: the player runs for the goal cell
    while a bounded-depth minimax pursuer hunts them down.

    - `/api/games` create games, submit evader actions, trigger pursuer turns
    - `/api/ai` ask the pursuer for a move or a score on any snapshot
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


from .routes import games, ai

app.include_router(games.router, prefix="/api/games", tags=["Games"])
app.include_router(ai.router, prefix="/api/ai", tags=["AI"])


# =============================================================================
# Service Endpoints
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Welcome message, links and the maze algorithms a game can use"""
    return {
        "message": "Welcome to Maze Chase API",
        "version": __version__,
        "documentation": "/api/docs",
        "health": "/health",
        "endpoints": {
            "games": "/api/games",
            "ai": "/api/ai"
        },
        "algorithms": [str(a) for a in MazeAlgorithm],
        "max_search_depth": MAX_SEARCH_DEPTH
    }


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "service": "maze-chase-api",
        "version": __version__
    }


# =============================================================================
# Error Handlers
# =============================================================================

def error_response(status_code: int, error, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "status_code": status_code, **extra}
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return error_response(exc.status_code, exc.detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """Out-of-range depths, board sizes and similar request errors"""
    return error_response(422, "Invalid request", details=jsonable_encoder(exc.errors()))


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return error_response(500, "Internal server error")
