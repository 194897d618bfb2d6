"""Catalog adapter and task persistence services."""

from demo_app.services.fakestore import (
    FakeStoreAPI,
    FakeStoreAPIError,
    FakeStoreClient,
    FakeStoreDecodeError,
    FakeStoreIntegrityError,
    FakeStoreStatusError,
    FakeStoreTransportError,
)
from demo_app.services.task_repository import SQLTaskRepository, TaskRepository

__all__ = [
    "FakeStoreAPI",
    "FakeStoreAPIError",
    "FakeStoreClient",
    "FakeStoreDecodeError",
    "FakeStoreIntegrityError",
    "FakeStoreStatusError",
    "FakeStoreTransportError",
    "SQLTaskRepository",
    "TaskRepository",
]
