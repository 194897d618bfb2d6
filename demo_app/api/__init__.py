"""FastAPI routes for the demo application."""

from demo_app.api.products import router as products_router
from demo_app.api.tasks import router as tasks_router

__all__ = ["products_router", "tasks_router"]
