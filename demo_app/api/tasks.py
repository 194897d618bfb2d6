"""FastAPI routes for tasks stored in the database."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from pydantic import BaseModel, ConfigDict, Field

from demo_app.api.dependencies import get_task_repository
from demo_app.models.task import MAX_ID, TITLE_MAX_LENGTH, AddTaskCommand, Task
from demo_app.services.task_repository import TaskRepository

router = APIRouter(prefix="/tasks", tags=["tasks"])

TaskRepositoryDep = Annotated[TaskRepository, Depends(get_task_repository)]
TaskId = Annotated[int, Path(ge=0, le=MAX_ID, description="Task id")]


class TaskRequest(BaseModel):
    """Request body for creating or updating a task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(
        min_length=1, max_length=TITLE_MAX_LENGTH, description="Task title"
    )
    description: str = Field(default="", description="Task description")


class TaskResponse(BaseModel):
    """Response schema for a task."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(description="Task id")
    title: str = Field(description="Task title")
    description: str = Field(description="Task description")
    created_at: datetime = Field(alias="createdAt", description="When created")
    updated_at: datetime | None = Field(
        alias="updatedAt", description="When last updated, null if never"
    )

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


@router.get("", response_model=list[TaskResponse])
async def list_tasks(repository: TaskRepositoryDep) -> list[TaskResponse]:
    """List every task."""
    tasks = await repository.list()
    return [TaskResponse.from_task(task) for task in tasks]


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def add_task(body: TaskRequest, repository: TaskRepositoryDep) -> TaskResponse:
    """Create a task stamped with the current time."""
    command = AddTaskCommand(title=body.title, description=body.description)
    task = await repository.add(command)
    return TaskResponse.from_task(task)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: TaskId, repository: TaskRepositoryDep) -> TaskResponse:
    """Fetch a single task.

    Raises:
        ResourceNotFoundError: 404 if no task has this id.
    """
    task = await repository.get_by_id(task_id)
    return TaskResponse.from_task(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: TaskId,
    body: TaskRequest,
    repository: TaskRepositoryDep,
) -> TaskResponse:
    """Replace title and description of a task.

    Raises:
        ResourceNotFoundError: 404 if no task has this id.
    """
    task = await repository.get_by_id(task_id)
    task.update(body.title, body.description)
    await repository.save(task)
    return TaskResponse.from_task(task)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_task(task_id: TaskId, repository: TaskRepositoryDep) -> Response:
    """Delete a task.

    Raises:
        ResourceNotFoundError: 404 if no task has this id.
    """
    await repository.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
