"""Shared fixtures: in-memory collaborators and API test clients."""

from collections.abc import AsyncGenerator, Iterator
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from demo_app.api.dependencies import get_fakestore_api, get_task_repository
from demo_app.errors import ResourceNotFoundError
from demo_app.main import app
from demo_app.models.product import (
    AddProductCommand,
    Product,
    ProductRating,
    UpdateProductCommand,
)
from demo_app.models.task import AddTaskCommand, Task


class InMemoryFakeStore:
    """FakeStoreAPI double holding products in a dict."""

    def __init__(self, products: list[Product] | None = None) -> None:
        self.products = {product.id: product for product in products or []}
        self.error: Exception | None = None

    def _raise_if_failing(self) -> None:
        if self.error is not None:
            raise self.error

    async def get_products(self) -> list[Product]:
        self._raise_if_failing()
        return list(self.products.values())

    async def get_product(self, product_id: int) -> Product:
        self._raise_if_failing()
        if product_id not in self.products:
            raise ResourceNotFoundError(f"product {product_id} not found")
        return self.products[product_id]

    async def add_product(self, command: AddProductCommand) -> Product:
        self._raise_if_failing()
        product = Product(id=max(self.products, default=0) + 1, **command.to_payload())
        self.products[product.id] = product
        return product

    async def update_product(self, command: UpdateProductCommand) -> Product:
        self._raise_if_failing()
        if command.id not in self.products:
            raise ResourceNotFoundError(f"product {command.id} not found")
        product = Product(id=command.id, **command.to_payload())
        self.products[product.id] = product
        return product

    async def delete_product(self, product_id: int) -> None:
        self._raise_if_failing()
        if self.products.pop(product_id, None) is None:
            raise ResourceNotFoundError(f"product {product_id} not found")


class InMemoryTaskRepository:
    """TaskRepository double keeping (independent copies of) tasks in a dict."""

    def __init__(self) -> None:
        self.rows: dict[int, tuple[str, str, datetime, datetime | None]] = {}
        self.next_id = 1
        self.error: Exception | None = None

    def _raise_if_failing(self) -> None:
        if self.error is not None:
            raise self.error

    def _to_task(self, task_id: int) -> Task:
        title, description, created_at, updated_at = self.rows[task_id]
        return Task(task_id, title, description, created_at, updated_at)

    async def list(self) -> list[Task]:
        self._raise_if_failing()
        return [self._to_task(task_id) for task_id in self.rows]

    async def get_by_id(self, task_id: int) -> Task:
        self._raise_if_failing()
        if task_id not in self.rows:
            raise ResourceNotFoundError(f"task {task_id} not found")
        return self._to_task(task_id)

    async def add(self, command: AddTaskCommand) -> Task:
        self._raise_if_failing()
        task_id = self.next_id
        self.next_id += 1
        self.rows[task_id] = (
            command.title,
            command.description,
            command.created_at,
            None,
        )
        return self._to_task(task_id)

    async def save(self, task: Task) -> None:
        self._raise_if_failing()
        if task.id not in self.rows:
            raise ResourceNotFoundError(f"task {task.id} not found")
        self.rows[task.id] = (
            task.title,
            task.description,
            task.created_at,
            task.updated_at,
        )

    async def delete(self, task_id: int) -> None:
        self._raise_if_failing()
        if self.rows.pop(task_id, None) is None:
            raise ResourceNotFoundError(f"task {task_id} not found")


def make_product(product_id: int = 16) -> Product:
    """Build a catalog product like the ones FakeStore serves."""
    return Product(
        id=product_id,
        title="Lock and Love Women's Removable Hooded Faux Leather Moto Biker Jacket",
        price=29.95,
        description="100% POLYURETHANE(shell) 100% POLYESTER(lining) 75% POLYESTER 25% COTTON (SWEATER)",
        category="women's clothing",
        image="https://fakestoreapi.com/img/81XH0e8fefL._AC_UY879_.jpg",
        rating=ProductRating(rate=2.9, count=340),
    )


@pytest.fixture
def fake_store() -> InMemoryFakeStore:
    """Catalog double pre-filled with product 16."""
    return InMemoryFakeStore([make_product(16)])


@pytest.fixture
def task_repository() -> InMemoryTaskRepository:
    """Empty task repository double."""
    return InMemoryTaskRepository()


@pytest.fixture
def api_client(
    fake_store: InMemoryFakeStore,
    task_repository: InMemoryTaskRepository,
) -> Iterator[TestClient]:
    """Test client with both collaborators replaced by in-memory doubles."""

    async def override_fakestore() -> AsyncGenerator[InMemoryFakeStore, None]:
        yield fake_store

    app.dependency_overrides[get_fakestore_api] = override_fakestore
    app.dependency_overrides[get_task_repository] = lambda: task_repository

    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()

