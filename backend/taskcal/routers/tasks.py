from datetime import date
from typing import Annotated, List

from fastapi import APIRouter, Depends, Header, HTTPException, Path, status
from taskcal.core.database import AsyncSessionLocal
from taskcal.models.task import Task
from taskcal.repositories.task_repository import TaskRepository
from taskcal.schemas.task import CalendarStats, TaskDateUpdate, TaskResponse, TaskUpsert
from taskcal.utils.dates import DATE_KEY_FORMAT

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={404: {"description": "Not found"}},
)

def get_task_repository() -> TaskRepository:
    return TaskRepository(AsyncSessionLocal)

async def get_current_user_id(x_user_id: Annotated[str, Header(min_length=1)]) -> str:
    return x_user_id

UserId = Annotated[str, Depends(get_current_user_id)]
Repo = Annotated[TaskRepository, Depends(get_task_repository)]
Day = Annotated[str, Path(pattern=r"^\d{4}-\d{2}-\d{2}$", description=f"Day key ({DATE_KEY_FORMAT})")]

task_not_found = HTTPException(
    status_code=status.HTTP_404_NOT_FOUND,
    detail="Task not found",
)

async def get_owned_task(task_id: str, user_id: UserId, repo: Repo) -> Task:
    # another user's task answers exactly like a missing one
    task = await repo.get_task(task_id)
    if task is None or task.user_id != user_id:
        raise task_not_found
    return task

OwnedTask = Annotated[Task, Depends(get_owned_task)]

@router.get("/unassigned", response_model=List[TaskResponse])
async def get_unassigned_tasks(user_id: UserId, repo: Repo):
    return await repo.get_unassigned_tasks(user_id)

@router.get("/backlog", response_model=List[TaskResponse])
async def get_backlog(user_id: UserId, repo: Repo):
    return await repo.get_backlog(user_id)

@router.get("/day/{day}", response_model=List[TaskResponse])
async def get_day_tasks(day: Day, user_id: UserId, repo: Repo):
    return await repo.get_day_tasks(user_id, day)

@router.get("/calendar", response_model=CalendarStats)
async def get_calendar_stats(start: date, end: date, user_id: UserId, repo: Repo):
    return await repo.get_calendar_stats(user_id, start, end)

@router.put("/{task_id}", response_model=TaskResponse)
async def create_or_update_task(task_id: str, task_in: TaskUpsert, user_id: UserId, repo: Repo):
    existing = await repo.get_task(task_id)
    if existing is not None and existing.user_id != user_id:
        raise task_not_found
    return await repo.create_or_update_task(user_id, task_id, task_in.name, task_in.date)

@router.post("/{task_id}/complete", response_model=TaskResponse)
async def mark_complete(task: OwnedTask, repo: Repo):
    return await repo.mark_complete(task.id)

@router.delete("/{task_id}/complete", response_model=TaskResponse)
async def mark_incomplete(task: OwnedTask, repo: Repo):
    return await repo.mark_incomplete(task.id)

@router.put("/{task_id}/date", response_model=TaskResponse)
async def add_date(date_in: TaskDateUpdate, task: OwnedTask, repo: Repo):
    return await repo.add_date(task.id, date_in.date)

@router.delete("/{task_id}/date", response_model=TaskResponse)
async def remove_date(task: OwnedTask, repo: Repo):
    return await repo.remove_date(task.id)

@router.delete("/{task_id}", response_model=TaskResponse)
async def delete_task(task: OwnedTask, repo: Repo):
    return await repo.delete_task(task.id)
