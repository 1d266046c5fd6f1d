# backend/farmsync/schemas/farm.py
from typing import Optional
from datetime import date, datetime
import enum

from pydantic import Field

from farmsync.schemas.base import RecordModel, NonEmptyStr


class SizeUnit(str, enum.Enum):
    acres = "acres"
    hectares = "hectares"
    sq_ft = "sq ft"


class GrowthStage(str, enum.Enum):
    planted = "planted"
    germinated = "germinated"
    growing = "growing"
    flowering = "flowering"
    fruiting = "fruiting"
    ready_to_harvest = "ready_to_harvest"
    harvested = "harvested"


# ----------------------------
# Farms
# ----------------------------
class FarmCreate(RecordModel):
    name: NonEmptyStr
    size: float = Field(gt=0)
    size_unit: SizeUnit = SizeUnit.acres
    location: NonEmptyStr


class FarmUpdate(RecordModel):
    not_null = ("name", "size", "size_unit")

    name: Optional[NonEmptyStr] = None
    size: Optional[float] = Field(default=None, gt=0)
    size_unit: Optional[SizeUnit] = None
    location: Optional[NonEmptyStr] = None


class FarmOut(RecordModel):
    id: str
    name: str
    size: float
    size_unit: str
    location: Optional[str] = None
    created_at: Optional[datetime] = None


# ----------------------------
# Crops
# ----------------------------
class CropCreate(RecordModel):
    farm_id: NonEmptyStr
    name: NonEmptyStr
    variety: Optional[str] = ""
    planting_date: date
    expected_harvest_date: Optional[date] = None
    # any stage may be set at any time; no transition order is enforced
    growth_stage: GrowthStage = GrowthStage.planted
    field: Optional[str] = ""


class CropUpdate(RecordModel):
    not_null = ("farm_id", "name", "planting_date", "growth_stage")

    farm_id: Optional[NonEmptyStr] = None
    name: Optional[NonEmptyStr] = None
    variety: Optional[str] = None
    planting_date: Optional[date] = None
    expected_harvest_date: Optional[date] = None
    growth_stage: Optional[GrowthStage] = None
    field: Optional[str] = None


class CropOut(RecordModel):
    id: str
    farm_id: str
    name: str
    variety: Optional[str] = None
    planting_date: Optional[date] = None
    expected_harvest_date: Optional[date] = None
    growth_stage: str
    field: Optional[str] = None
