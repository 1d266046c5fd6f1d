# backend/farmsync/models/finance.py

from sqlalchemy import Column, String, Float, Date, DateTime, Text

from farmsync.core.database import Base
from farmsync.models.farm import gen_uuid, utcnow


# ============================================================
# EXPENSE
# ============================================================
class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    farm_id = Column(String(36), nullable=False, index=True)
    category = Column(String, nullable=False)   # seeds, equipment, fertilizer, labor, fuel, maintenance, other
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)


# ============================================================
# INCOME
# ============================================================
class Income(Base):
    __tablename__ = "income"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    description = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
    source = Column(String, nullable=False, default="crop_sales")

    crop_id = Column(String(36), nullable=True, index=True)
    farm_id = Column(String(36), nullable=True, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
