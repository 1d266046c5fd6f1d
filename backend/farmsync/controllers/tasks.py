# backend/farmsync/controllers/tasks.py

from datetime import datetime
from typing import Any, Dict, Optional

from farmsync.controllers.base import PageController
from farmsync.controllers.list_state import find_record
from farmsync.schemas.task import TaskStatus
from farmsync.services import filter_service as fs
from farmsync.services.categories import PRIORITIES, TASK_TYPES, lookup
from farmsync.services.export_service import crop_name, farm_name


class TasksController(PageController):
    page = "tasks"
    sources = ("tasks", "farms", "crops")
    error_message = "Failed to load tasks"

    async def toggle_complete(self, task_id: str) -> Optional[Dict]:
        task = find_record(self.data.get("tasks"), task_id)
        if task is None:
            task = await self.gateways.tasks.get_by_id(task_id)
        if task is None:
            self.notify("error", "Failed to update task")
            return None

        done = fs.is_task_completed(task)
        status = TaskStatus.pending.value if done else TaskStatus.completed.value
        updated = await self.update("tasks", task_id, {"status": status})
        if updated is not None:
            # replace the generic update message with the toggle-specific one
            self.notifications.pop()
            self.notify("success", "Task completed!" if updated["completed"] else "Task reopened!")
        return updated

    def view_model(self, view: str = fs.TaskView.pending.value, now: Optional[datetime] = None) -> Dict[str, Any]:
        tasks = self.data.get("tasks", [])
        farms = self.data.get("farms", [])
        crops = self.data.get("crops", [])
        visible = fs.sort_tasks(fs.filter_tasks(tasks, view, now=now))
        return {
            "filter": fs.TaskView(view).value,
            "counts": {v.value: len(fs.filter_tasks(tasks, v.value, now=now)) for v in fs.TaskView},
            "tasks": [
                {
                    **t,
                    "farm_name": farm_name(t.get("farm_id"), farms),
                    "crop_name": crop_name(t.get("crop_id"), crops),
                    "priority_style": lookup(PRIORITIES, t.get("priority")).as_dict(),
                }
                for t in visible
            ],
            "task_types": TASK_TYPES,
        }
