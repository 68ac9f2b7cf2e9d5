"""
Tasks repository module for client to-dos.
"""

import logging
from typing import Optional

from bizdesk.errors import NotFoundError
from bizdesk.models.crm import TaskInput

from .base import BaseRepository
from .dates import iso_date
from .models import Task

logger = logging.getLogger(__name__)


class TaskRepository(BaseRepository):
    """Repository for tasks; tasks are deleted along with their client."""

    def list_by_business(
        self, business_id: int, status: Optional[str] = None
    ) -> list[Task]:
        query = "SELECT * FROM tasks WHERE business_id = ?"
        params: list = [business_id]
        if status:
            query += " AND status = ?"
            params.append(status)
        query += " ORDER BY created_at DESC, id DESC"

        with self._get_connection() as conn:
            return [Task.from_row(row) for row in conn.execute(query, params)]

    def list_for_client(self, client_id: int) -> list[Task]:
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM tasks
                WHERE client_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (client_id,),
            )
            return [Task.from_row(row) for row in cursor.fetchall()]

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
            return Task.from_row(row) if row else None

    def create(self, task: TaskInput) -> Task:
        with self._get_connection() as conn:
            task_id = self._insert(
                conn,
                "tasks",
                {
                    "business_id": task.business_id,
                    "client_id": task.client_id,
                    **self._columns(task),
                },
            )
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()

        logger.info(f"Created task {task_id} for client {task.client_id}")
        return Task.from_row(row)

    def update(self, task: TaskInput) -> Task:
        with self._get_connection() as conn:
            if not self._update_fields(conn, "tasks", task.id, self._columns(task)):
                raise NotFoundError("Task", task.id)
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task.id,)).fetchone()
        return Task.from_row(row)

    def delete(self, task_id: int) -> bool:
        with self._get_connection() as conn:
            return conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,)).rowcount > 0

    @staticmethod
    def _columns(task: TaskInput) -> dict:
        return {
            "title": task.title,
            "description": task.description,
            "status": task.status,
            "due_date": iso_date(task.due_date),
        }
