"""Task repository - data access for the task calendar."""

import asyncio
import logging
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskcal.models.task import Task
from taskcal.utils.dates import format_param_date

logger = logging.getLogger(__name__)

DateCounts = Dict[str, int]


class TaskRepository:
    """
    Queries and mutations over ``tasks``, scoped by owning user.

    Every call opens its own session from the factory and closes it before
    returning; nothing is shared between calls. Store errors
    (``NoResultFound``, ``IntegrityError``, connection failures) are raised
    to the caller as-is after the session rolls back.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = session_factory

    async def get_task(self, task_id: str) -> Optional[Task]:
        async with self._sessions() as db:
            return await db.get(Task, task_id)

    # ---- listings ----

    async def _list(self, *criteria) -> List[Task]:
        async with self._sessions() as db:
            result = await db.execute(
                select(Task).where(*criteria).order_by(Task.created_at.asc())
            )
            return list(result.scalars().all())

    async def get_unassigned_tasks(self, user_id: str) -> List[Task]:
        return await self._list(Task.user_id == user_id, Task.bucket_id.is_(None))

    async def get_backlog(self, user_id: str) -> List[Task]:
        return await self._list(Task.user_id == user_id, Task.date.is_(None))

    async def get_day_tasks(self, user_id: str, day: str) -> List[Task]:
        return await self._list(Task.user_id == user_id, Task.date == day)

    # ---- calendar counts ----

    async def _counts_by_date(self, user_id: str, start: date, end: date, *criteria) -> DateCounts:
        stmt = (
            select(Task.date, func.count(Task.date))
            .where(
                Task.user_id == user_id,
                Task.date > format_param_date(start),
                Task.date < format_param_date(end),
                *criteria,
            )
            .group_by(Task.date)
            .order_by(Task.date.asc())
        )
        async with self._sessions() as db:
            rows = (await db.execute(stmt)).all()

        counts: DateCounts = {}
        for day, count in rows:
            if day is None:
                raise AssertionError("grouped task count came back without a date key")
            counts[day] = count
        return counts

    async def get_total_counts_by_date(self, user_id: str, start: date, end: date) -> DateCounts:
        """Tasks per day for days strictly between ``start`` and ``end``."""
        return await self._counts_by_date(user_id, start, end)

    async def get_completed_counts_by_date(self, user_id: str, start: date, end: date) -> DateCounts:
        """Completed tasks per day for days strictly between ``start`` and ``end``."""
        return await self._counts_by_date(user_id, start, end, Task.complete.is_(True))

    async def get_calendar_stats(self, user_id: str, start: date, end: date) -> Dict[str, DateCounts]:
        # "incomplete" carries the completed counts; callers rely on that shape
        total, incomplete = await asyncio.gather(
            self.get_total_counts_by_date(user_id, start, end),
            self.get_completed_counts_by_date(user_id, start, end),
        )
        return {"total": total, "incomplete": incomplete}

    # ---- mutations ----

    async def _update(self, task_id: str, **values) -> Task:
        async with self._sessions.begin() as db:
            result = await db.execute(
                update(Task)
                .where(Task.id == task_id)
                .values(**values)
                .returning(Task)
            )
            task = result.scalar_one()
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(values))
        return task

    async def mark_complete(self, task_id: str) -> Task:
        return await self._update(task_id, complete=True)

    async def mark_incomplete(self, task_id: str) -> Task:
        return await self._update(task_id, complete=False)

    async def add_date(self, task_id: str, day: str) -> Task:
        return await self._update(task_id, date=day)

    async def remove_date(self, task_id: str) -> Task:
        return await self._update(task_id, date=None)

    async def create_or_update_task(
        self,
        user_id: str,
        task_id: str,
        name: Optional[str] = None,
        day: Optional[str] = None,
    ) -> Task:
        """
        Upsert by id.

        An existing task only gets its name overwritten; ``day`` is applied
        on creation only. Date changes go through ``add_date``/``remove_date``.
        """
        if not user_id:
            raise ValueError("user_id is required")
        name = name or ""

        async with self._sessions.begin() as db:
            task = await db.get(Task, task_id)
            if task is None:
                task = Task(id=task_id, user_id=user_id, name=name, date=day)
                db.add(task)
                created = True
            else:
                task.name = name
                created = False
            await db.flush()
            await db.refresh(task)

        logger.debug("Task %s id=%s user_id=%s", "created" if created else "renamed", task_id, user_id)
        return task

    async def delete_task(self, task_id: str) -> Task:
        async with self._sessions.begin() as db:
            result = await db.execute(
                delete(Task).where(Task.id == task_id).returning(Task)
            )
            task = result.scalar_one()
        logger.debug("Task deleted id=%s", task_id)
        return task
