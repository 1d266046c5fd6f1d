# backend/farmsync/models/farm.py

from sqlalchemy import Column, String, Float, Date, DateTime, Text
import uuid
from datetime import datetime, timezone

from farmsync.core.database import Base


def gen_uuid():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ============================================================
# FARM
# ============================================================
class Farm(Base):
    __tablename__ = "farms"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    name = Column(String, nullable=False)
    size = Column(Float, nullable=False)
    size_unit = Column(String, nullable=False, default="acres")   # acres, hectares, sq ft
    location = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)


# ============================================================
# CROP
# farm_id is a plain indexed column: deleting a farm leaves its
# crops in place and they render as "Unknown Farm".
# ============================================================
class Crop(Base):
    __tablename__ = "crops"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    farm_id = Column(String(36), nullable=False, index=True)
    name = Column(String, nullable=False)
    variety = Column(String, nullable=True)
    field = Column(Text, nullable=True)

    planting_date = Column(Date, nullable=False)
    expected_harvest_date = Column(Date, nullable=True)
    growth_stage = Column(String, nullable=False, default="planted")

    created_at = Column(DateTime, default=utcnow, index=True)
