"""
Task operations.
"""

from bizdesk.models import StatusFilter, TaskInput

from .base import HandlerGroup, operation, payload_id, rows


class TasksHandler(HandlerGroup):
    """Operations for client to-dos."""

    @operation("get-tasks", "tasks-data")
    def get_tasks(self, payload):
        business_id = payload_id(payload, "business_id")
        status = StatusFilter.from_options(payload).status
        return rows(self.repository.tasks.list_by_business(business_id, status=status))

    @operation("get-client-tasks", "client-tasks-data")
    def get_client_tasks(self, payload):
        client_id = payload_id(payload, "client_id")
        return rows(self.repository.tasks.list_for_client(client_id))

    @operation("save-task", "task-saved")
    def save_task(self, payload):
        return self.repository.tasks.create(TaskInput.from_payload(payload)).to_dict()

    @operation("update-task", "task-updated")
    def update_task(self, payload):
        task = TaskInput.from_payload(payload, require_id=True)
        return self.repository.tasks.update(task).to_dict()

    @operation("delete-task", "task-deleted")
    def delete_task(self, payload):
        task_id = payload_id(payload)
        return {"id": task_id, "deleted": self.repository.tasks.delete(task_id)}
