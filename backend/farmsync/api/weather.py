# backend/farmsync/api/weather.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from farmsync.api.deps import get_gateways
from farmsync.crud.gateways import Gateways
from farmsync.services.advisory_service import get_farming_advice

router = APIRouter(prefix="/weather", tags=["weather"])

MAX_HISTORY_DAYS = 366


@router.get("/current")
async def current_weather(location: Optional[str] = None, gateways: Gateways = Depends(get_gateways)):
    return await gateways.weather.get_current_weather(location)


@router.get("/forecast")
async def weather_forecast(
    days: int = Query(default=5, ge=1, le=14),
    location: Optional[str] = None,
    gateways: Gateways = Depends(get_gateways),
):
    return await gateways.weather.get_forecast(days, location)


@router.get("/alerts")
async def weather_alerts(location: Optional[str] = None, gateways: Gateways = Depends(get_gateways)):
    return await gateways.weather.get_alerts(location)


@router.get("/historical")
async def weather_history(
    start_date: date,
    end_date: date,
    location: Optional[str] = None,
    gateways: Gateways = Depends(get_gateways),
):
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")
    if (end_date - start_date).days > MAX_HISTORY_DAYS:
        raise HTTPException(status_code=400, detail="History is limited to one year per request")
    return await gateways.weather.get_historical(start_date, end_date, location)


@router.get("/advice")
async def farming_advice(location: Optional[str] = None, gateways: Gateways = Depends(get_gateways)):
    current = await gateways.weather.get_current_weather(location)
    return {"weather": current, "advice": get_farming_advice(current)}
