"""FastAPI application setup."""
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from vidpub.domain.errors import PublishError, ToolFailure
from vidpub.interfaces.api.dependencies import get_staging_janitor
from vidpub.interfaces.api.routers import thumbnails_router, videos_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app startup/shutdown."""
    janitor = get_staging_janitor()
    task = asyncio.create_task(janitor.start_background_sweeper())
    yield
    janitor.stop_background_sweeper()
    await task


app = FastAPI(
    title="vidpub - Video Publish Service",
    description="Receives video uploads, remuxes them for streaming and publishes them to object storage",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
)

app.include_router(videos_router)
app.include_router(thumbnails_router)


@app.exception_handler(PublishError)
async def publish_error_handler(request: Request, exc: PublishError) -> JSONResponse:
    """Map pipeline errors to a structured body; diagnostics stay in the log."""
    if isinstance(exc, ToolFailure) and exc.stderr:
        logger.warning(f"{request.url.path}: {exc.message}\n{exc.stderr.strip()}")
    elif exc.status_code >= 500:
        logger.error(f"{request.url.path}: {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"kind": exc.kind, "detail": exc.message})


@app.get("/health")
async def health_check() -> dict:
    """Health probe."""
    return {"status": "healthy"}
