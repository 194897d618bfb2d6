"""Domain models and table mappings."""

from demo_app.models.product import (
    AddProductCommand,
    Product,
    ProductRating,
    UpdateProductCommand,
)
from demo_app.models.task import AddTaskCommand, Task, TaskRecord

__all__ = [
    "AddProductCommand",
    "AddTaskCommand",
    "Product",
    "ProductRating",
    "Task",
    "TaskRecord",
    "UpdateProductCommand",
]
