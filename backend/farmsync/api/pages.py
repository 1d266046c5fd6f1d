# backend/farmsync/api/pages.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from farmsync.api.deps import get_gateways, load_page
from farmsync.controllers import (
    CropsController,
    DashboardController,
    ExpensesController,
    FarmDetailsController,
    FarmsController,
    IncomeController,
    PageState,
    TasksController,
    WeatherController,
)
from farmsync.crud.gateways import Gateways
from farmsync.services.categories import ALL
from farmsync.services.filter_service import DateRange, StageGroup, TaskView

router = APIRouter(prefix="/pages", tags=["pages"])


@router.get("/dashboard")
async def dashboard_page(gateways: Gateways = Depends(get_gateways)):
    page = await load_page(DashboardController(gateways))
    return page.view_model()


@router.get("/farms")
async def farms_page(gateways: Gateways = Depends(get_gateways)):
    page = await load_page(FarmsController(gateways))
    return page.view_model()


@router.get("/farms/{farm_id}")
async def farm_details_page(farm_id: str, gateways: Gateways = Depends(get_gateways)):
    page = FarmDetailsController(gateways, farm_id)
    await page.load()
    if page.not_found:
        raise HTTPException(status_code=404, detail=page.error)
    if page.state is PageState.error:
        raise HTTPException(status_code=503, detail=page.error)
    return page.view_model()


@router.get("/crops")
async def crops_page(
    stage: StageGroup = StageGroup.all,
    gateways: Gateways = Depends(get_gateways),
):
    page = await load_page(CropsController(gateways))
    return page.view_model(stage_group=stage.value)


@router.get("/tasks")
async def tasks_page(
    view: TaskView = TaskView.pending,
    gateways: Gateways = Depends(get_gateways),
):
    page = await load_page(TasksController(gateways))
    return page.view_model(view=view.value)


@router.get("/expenses")
async def expenses_page(
    category: str = ALL,
    date_range: DateRange = DateRange.this_month,
    start: Optional[date] = None,
    end: Optional[date] = None,
    gateways: Gateways = Depends(get_gateways),
):
    page = await load_page(ExpensesController(gateways))
    return page.view_model(category=category, date_range=date_range.value, start=start, end=end)


@router.get("/income")
async def income_page(
    year: Optional[int] = Query(default=None, ge=1900, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    gateways: Gateways = Depends(get_gateways),
):
    page = await load_page(IncomeController(gateways))
    return page.view_model(year=year, month=month)


@router.get("/weather")
async def weather_page(location: Optional[str] = None, gateways: Gateways = Depends(get_gateways)):
    page = await load_page(WeatherController(gateways, location))
    return page.view_model()
