"""FastAPI dependencies that provide the handlers' collaborators."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from demo_app.database import get_db
from demo_app.services.fakestore import FakeStoreAPI, FakeStoreClient
from demo_app.services.task_repository import SQLTaskRepository, TaskRepository


async def get_fakestore_api() -> AsyncGenerator[FakeStoreAPI, None]:
    """Dependency that provides a FakeStore client for one request."""
    async with FakeStoreClient() as client:
        yield client


def get_task_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskRepository:
    """Dependency that provides a task repository bound to the request session."""
    return SQLTaskRepository(db)
