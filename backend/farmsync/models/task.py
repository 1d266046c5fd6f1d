# backend/farmsync/models/task.py

from sqlalchemy import Column, String, DateTime, Text

from farmsync.core.database import Base
from farmsync.models.farm import gen_uuid, utcnow


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    farm_id = Column(String(36), nullable=False, index=True)
    crop_id = Column(String(36), nullable=True, index=True)

    type = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(DateTime, nullable=True)
    priority = Column(String, default="medium")     # low, medium, high

    # single lifecycle column; "completed" is derived from it
    status = Column(String, nullable=False, default="pending")    # pending, in_progress, completed, on_hold

    created_at = Column(DateTime, default=utcnow, index=True)
