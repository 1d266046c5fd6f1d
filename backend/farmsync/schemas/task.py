# backend/farmsync/schemas/task.py
from typing import Optional
from datetime import datetime
import enum

from pydantic import Field, computed_field, model_validator

from farmsync.schemas.base import RecordModel, NonEmptyStr


class Priority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class TaskStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    on_hold = "on_hold"


class _TaskWrite(RecordModel):
    """
    ``status`` is the stored lifecycle; a bare ``completed`` flag from older
    clients is translated onto it unless ``status`` was sent explicitly.
    """

    @model_validator(mode="after")
    def _status_from_completed(self):
        if self.completed is not None and "status" not in self.model_fields_set:
            self.status = TaskStatus.completed.value if self.completed else TaskStatus.pending.value
        return self


class TaskCreate(_TaskWrite):
    farm_id: NonEmptyStr
    crop_id: Optional[str] = None
    type: NonEmptyStr
    description: Optional[str] = ""
    due_date: datetime = Field(default_factory=datetime.now)
    priority: Priority = Priority.medium
    status: TaskStatus = TaskStatus.pending
    completed: Optional[bool] = Field(default=None, exclude=True)


class TaskUpdate(_TaskWrite):
    not_null = ("farm_id", "type", "status")

    farm_id: Optional[NonEmptyStr] = None
    crop_id: Optional[str] = None
    type: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None
    completed: Optional[bool] = Field(default=None, exclude=True)


class TaskOut(RecordModel):
    id: str
    farm_id: str
    crop_id: Optional[str] = None
    type: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[str] = None
    status: str

    @computed_field
    @property
    def completed(self) -> bool:
        return self.status == TaskStatus.completed.value
