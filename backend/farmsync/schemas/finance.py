# backend/farmsync/schemas/finance.py
from typing import Optional
from datetime import date as date_type, datetime
import enum

from pydantic import Field

from farmsync.schemas.base import RecordModel, NonEmptyStr


class ExpenseCategory(str, enum.Enum):
    seeds = "seeds"
    equipment = "equipment"
    fertilizer = "fertilizer"
    labor = "labor"
    fuel = "fuel"
    maintenance = "maintenance"
    other = "other"


class IncomeSource(str, enum.Enum):
    crop_sales = "crop_sales"
    direct_sales = "direct_sales"
    contracts = "contracts"
    subsidies = "subsidies"
    insurance = "insurance"
    grants = "grants"
    other = "other"


# ----------------------------
# Expenses
# ----------------------------
class ExpenseCreate(RecordModel):
    farm_id: NonEmptyStr
    category: ExpenseCategory
    amount: float = Field(gt=0)
    date: date_type
    description: Optional[str] = ""


class ExpenseUpdate(RecordModel):
    not_null = ("farm_id", "category", "amount", "date")

    farm_id: Optional[NonEmptyStr] = None
    category: Optional[ExpenseCategory] = None
    amount: Optional[float] = Field(default=None, gt=0)
    date: Optional[date_type] = None
    description: Optional[str] = None


class ExpenseOut(RecordModel):
    id: str
    farm_id: str
    # stored values outside ExpenseCategory are passed through as-is
    category: str
    amount: float
    date: Optional[date_type] = None
    description: Optional[str] = None


# ----------------------------
# Income
# ----------------------------
class IncomeCreate(RecordModel):
    description: NonEmptyStr
    amount: float = Field(gt=0)
    date: date_type
    source: IncomeSource = IncomeSource.crop_sales
    crop_id: Optional[str] = None
    farm_id: Optional[str] = None
    notes: Optional[str] = ""


class IncomeUpdate(RecordModel):
    not_null = ("description", "amount", "date", "source")

    description: Optional[NonEmptyStr] = None
    amount: Optional[float] = Field(default=None, gt=0)
    date: Optional[date_type] = None
    source: Optional[IncomeSource] = None
    crop_id: Optional[str] = None
    farm_id: Optional[str] = None
    notes: Optional[str] = None


class IncomeOut(RecordModel):
    id: str
    description: str
    amount: float
    date: Optional[date_type] = None
    source: str
    crop_id: Optional[str] = None
    farm_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
