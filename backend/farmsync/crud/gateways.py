# backend/farmsync/crud/gateways.py
"""
Gateway registry.

Built once at application start over a session factory and handed to
routers and page controllers; nothing here keeps module-level state.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from farmsync.crud.base import EntityGateway
from farmsync.models import Farm, Crop, Task, Expense, Income
from farmsync.schemas.farm import FarmCreate, FarmUpdate, FarmOut, CropCreate, CropUpdate, CropOut
from farmsync.schemas.task import TaskCreate, TaskUpdate, TaskOut
from farmsync.schemas.finance import (
    ExpenseCreate, ExpenseUpdate, ExpenseOut,
    IncomeCreate, IncomeUpdate, IncomeOut,
)
from farmsync.services.weather_service import WeatherService


@dataclass
class Gateways:
    farms: EntityGateway
    crops: EntityGateway
    tasks: EntityGateway
    expenses: EntityGateway
    income: EntityGateway
    weather: WeatherService

    def get(self, name: str):
        try:
            return getattr(self, name)
        except AttributeError:
            raise KeyError(f"unknown gateway: {name}") from None


def build_gateways(
    session_factory: async_sessionmaker,
    weather: Optional[WeatherService] = None,
) -> Gateways:
    return Gateways(
        farms=EntityGateway("farm", Farm, FarmCreate, FarmUpdate, FarmOut, session_factory),
        crops=EntityGateway("crop", Crop, CropCreate, CropUpdate, CropOut, session_factory),
        tasks=EntityGateway("task", Task, TaskCreate, TaskUpdate, TaskOut, session_factory),
        expenses=EntityGateway("expense", Expense, ExpenseCreate, ExpenseUpdate, ExpenseOut, session_factory),
        income=EntityGateway("income", Income, IncomeCreate, IncomeUpdate, IncomeOut, session_factory),
        weather=weather or WeatherService(),
    )
