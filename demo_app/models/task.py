"""Task entity, its creation command, and the table it is stored in."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from demo_app.database import Base

# Largest value a BIGINT id column can hold
MAX_ID = 2**63 - 1
TITLE_MAX_LENGTH = 255


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TaskRecord(Base):
    """Row of the ``task`` table.

    Only used for column binding by the repository. Callers never receive
    a TaskRecord; the repository converts rows into Task values.

    Attributes:
        id: Storage-assigned identifier
        title: Task title
        description: Task description
        created_at: Timestamp when the task was created
        updated_at: Timestamp of the last update, NULL until first update
    """

    __tablename__ = "task"

    id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=True,
    )
    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<TaskRecord(id={self.id!r}, title={self.title!r})>"


class Task:
    """A to-do item.

    id and created_at never change after creation. Title and description
    change only through update(), which also stamps updated_at.
    """

    def __init__(
        self,
        id: int,
        title: str,
        description: str,
        created_at: datetime,
        updated_at: datetime | None = None,
    ) -> None:
        self._id = id
        self._title = title
        self._description = description
        self._created_at = created_at
        self._updated_at = updated_at

    @property
    def id(self) -> int:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime | None:
        return self._updated_at

    def update(self, title: str, description: str) -> None:
        """Replace title and description and stamp the update time."""
        self._title = title
        self._description = description
        self._updated_at = _utcnow()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return (
            self._id == other._id
            and self._title == other._title
            and self._description == other._description
            and self._created_at == other._created_at
            and self._updated_at == other._updated_at
        )

    def __repr__(self) -> str:
        return f"<Task(id={self._id!r}, title={self._title!r})>"


@dataclass(frozen=True)
class AddTaskCommand:
    """Input for creating a task.

    No validation happens here; the request layer trims and checks the
    fields before building the command. created_at is captured when the
    command is constructed.
    """

    title: str
    description: str
    created_at: datetime = field(default_factory=_utcnow)
