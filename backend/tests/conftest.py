from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from taskcal.core.database import build_engine, init_models
from taskcal.models.task import Task
from taskcal.repositories.task_repository import TaskRepository

EPOCH = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture()
async def engine(tmp_path):
    """Fresh SQLite file per test, tables created the same way the app does at startup."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'tasks.sqlite3'}", poolclass=NullPool)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def sessions(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
def repo(sessions) -> TaskRepository:
    return TaskRepository(sessions)


@pytest.fixture()
def add_task(sessions):
    """
    Insert a task row directly, bypassing the repository.

    ``minute`` pins created_at to EPOCH + minute so ordering assertions
    do not depend on clock resolution.
    """
    ids = count(1)

    async def _add(user_id="u1", *, minute=None, **fields):
        n = next(ids)
        fields.setdefault("id", f"task-{n}")
        fields.setdefault("name", f"Task {n}")
        fields["created_at"] = EPOCH + timedelta(minutes=n if minute is None else minute)
        task = Task(user_id=user_id, **fields)
        async with sessions.begin() as db:
            db.add(task)
        return task

    return _add
