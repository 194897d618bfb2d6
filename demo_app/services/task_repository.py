"""Task persistence over a single relational table.

All statements are SQLAlchemy Core constructs against the ``task`` table,
executed on the request's AsyncSession with bound parameters. Rows are
converted to Task values immediately, so callers never hold anything tied
to the session.
"""

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from demo_app.errors import ResourceNotFoundError, StorageError
from demo_app.models.task import AddTaskCommand, Task, TaskRecord

logger = logging.getLogger(__name__)

task_table = TaskRecord.__table__


class TaskRepository(Protocol):
    """Task storage operations the API layer depends on."""

    async def list(self) -> list[Task]: ...

    async def get_by_id(self, task_id: int) -> Task: ...

    async def add(self, command: AddTaskCommand) -> Task: ...

    async def save(self, task: Task) -> None: ...

    async def delete(self, task_id: int) -> None: ...


def _to_task(row: Row[Any]) -> Task:
    return Task(
        id=row.id,
        title=row.title,
        description=row.description,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLTaskRepository:
    """TaskRepository backed by the ``task`` table.

    Save and delete check the affected row count, so an id that does not
    exist is reported as ResourceNotFoundError instead of silently succeeding.
    Writes commit before returning, so a response is only sent for rows
    that are actually stored.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _execute(self, statement: Any, action: str) -> Any:
        try:
            return await self._session.execute(statement)
        except SQLAlchemyError as e:
            logger.error("Task storage error while trying to %s: %s", action, e)
            raise StorageError(f"Failed to {action}: {e}") from e

    async def _commit(self, action: str) -> None:
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            logger.error("Task storage error while committing %s: %s", action, e)
            raise StorageError(f"Failed to commit {action}: {e}") from e

    async def list(self) -> list[Task]:
        """Return every task in storage order; an empty table yields []."""
        result = await self._execute(select(task_table), "list tasks")
        rows: Sequence[Row[Any]] = result.fetchall()
        return [_to_task(row) for row in rows]

    async def get_by_id(self, task_id: int) -> Task:
        """Fetch one task.

        Raises:
            ResourceNotFoundError: If no row has this id.
            StorageError: On any other database failure.
        """
        result = await self._execute(
            select(task_table).where(task_table.c.id == task_id),
            f"get task {task_id}",
        )
        row = result.first()
        if row is None:
            raise ResourceNotFoundError(f"task {task_id} not found")
        return _to_task(row)

    async def add(self, command: AddTaskCommand) -> Task:
        """Insert a task and return it with its generated id.

        Raises:
            StorageError: If the insert fails or returns no row.
        """
        statement = (
            insert(task_table)
            .values(
                title=command.title,
                description=command.description,
                created_at=command.created_at,
            )
            .returning(task_table)
        )
        result = await self._execute(statement, "add task")
        row = result.first()
        if row is None:
            raise StorageError("Insert did not return the created task")
        task = _to_task(row)
        await self._commit("add task")
        return task

    async def save(self, task: Task) -> None:
        """Persist title, description and updated_at of an existing task.

        Raises:
            ResourceNotFoundError: If no row has this id.
            StorageError: On any other database failure.
        """
        statement = (
            update(task_table)
            .where(task_table.c.id == task.id)
            .values(
                title=task.title,
                description=task.description,
                updated_at=task.updated_at,
            )
        )
        result = await self._execute(statement, f"save task {task.id}")
        if result.rowcount == 0:
            raise ResourceNotFoundError(f"task {task.id} not found")
        await self._commit(f"save task {task.id}")

    async def delete(self, task_id: int) -> None:
        """Remove a task.

        Raises:
            ResourceNotFoundError: If no row has this id.
            StorageError: On any other database failure.
        """
        result = await self._execute(
            delete(task_table).where(task_table.c.id == task_id),
            f"delete task {task_id}",
        )
        if result.rowcount == 0:
            raise ResourceNotFoundError(f"task {task_id} not found")
        await self._commit(f"delete task {task_id}")
