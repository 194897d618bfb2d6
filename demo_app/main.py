"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response, status

from demo_app import __version__
from demo_app.api.errors import setup_error_handlers
from demo_app.api.middleware import RequestLoggingMiddleware
from demo_app.api.products import router as products_router
from demo_app.api.tasks import router as tasks_router
from demo_app.config import settings
from demo_app.database import dispose_engine
from demo_app.logging_config import configure_logging

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await dispose_engine()


app = FastAPI(
    title="Demo App",
    description="Products proxied to the FakeStore API and tasks stored in PostgreSQL",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
setup_error_handlers(app)

# Include API routers
app.include_router(products_router)
app.include_router(tasks_router)


@app.get("/", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def root() -> Response:
    """Liveness probe with no body."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
