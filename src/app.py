from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import Any, AsyncGenerator
from .routers import commands
from .routers.commands import get_command_repository
from .config.constants import COMMANDS_ROUTE_PREFIX, DEFAULT_PORT
from .core.repository.interface import CommandRepository
from .models.responses import HealthCheckResponse
from contextlib import asynccontextmanager
import os
import logging
from dotenv import load_dotenv

# Configure logging at module level
logging.basicConfig(
    level=logging.WARNING,  # Set default to WARNING for all loggers
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

# Set your application loggers to DEBUG
logging.getLogger("src").setLevel(logging.DEBUG)  # All src.* modules
logging.getLogger("__main__").setLevel(logging.DEBUG)

# Keep third-party loggers at INFO or WARNING to reduce noise
logging.getLogger("uvicorn.access").setLevel(logging.INFO)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)
logging.getLogger("asyncio").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[Any, Any]:
    # Load environment variables at startup
    env_path = os.path.join(os.path.dirname(__file__), "..", ".env")
    if os.path.exists(env_path):
        load_dotenv(env_path)
        logger.info(f"Loaded environment from {env_path}")
    else:
        logger.info(f"No .env file found at {env_path}, using system environment variables")
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Command API",
    description="API for storing and looking up command-line snippets by platform",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:5500",
        "http://localhost:5500",
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"],
)

# Include routers
app.include_router(commands.router)


@app.get("/")
async def root() -> dict[str, Any]:
    return {
        "message": "Welcome to the Command API",
        "docs_url": "/docs",
        "endpoints": {"commands": COMMANDS_ROUTE_PREFIX},
    }


@app.get("/healthz", response_model=HealthCheckResponse, tags=["Health"])
async def health_check(
    repository: CommandRepository = Depends(get_command_repository),
) -> HealthCheckResponse:
    """Check that the command store is reachable"""
    try:
        command_count = await repository.count_commands()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail=f"Storage unavailable: {e}")

    return HealthCheckResponse(
        status="healthy",
        repository=type(repository).__name__,
        command_count=command_count,
    )


if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", DEFAULT_PORT))
    logger.info(f"Starting Command API on port {port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
