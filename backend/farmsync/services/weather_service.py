# backend/farmsync/services/weather_service.py

from datetime import datetime, date, timedelta, timezone
from typing import Any, Dict, List, Optional
import random
import uuid

from farmsync.core.config import settings
from farmsync.core.logger import get_logger

# NOTE:
# Values are mock responses; there is no external weather provider yet.
# Readings are derived from a generator seeded per location + day so the
# dashboard and the weather page agree within one day.

log = get_logger("services.weather")

MOCK_CONDITIONS = [
    {"condition": "sunny", "temperature": 75, "humidity": 45},
    {"condition": "cloudy", "temperature": 68, "humidity": 60},
    {"condition": "rainy", "temperature": 62, "humidity": 85},
    {"condition": "stormy", "temperature": 58, "humidity": 90},
]

ALERT_TYPES = [
    {"type": "frost", "severity": "warning", "message": "Frost warning tonight - protect sensitive plants"},
    {"type": "wind", "severity": "advisory", "message": "High wind advisory - secure equipment"},
    {"type": "rain", "severity": "watch", "message": "Heavy rain expected - check drainage"},
    {"type": "heat", "severity": "warning", "message": "Excessive heat warning - increase watering frequency"},
]

ALERT_CHANCE = 0.3


class WeatherService:
    """Async mock weather provider: current conditions, forecast, alerts, history."""

    def __init__(self, location: Optional[str] = None, clock=None):
        self.location = location or settings.WEATHER_LOCATION
        self._clock = clock or (lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    def _rng(self, location: str, day: date, salt: str) -> random.Random:
        return random.Random(f"{location}|{day.isoformat()}|{salt}")

    def _now(self) -> datetime:
        return self._clock()

    async def get_current_weather(self, location: Optional[str] = None) -> Dict[str, Any]:
        location = location or self.location
        now = self._now()
        rng = self._rng(location, now.date(), "current")
        reading = rng.choice(MOCK_CONDITIONS)
        return {
            **reading,
            "location": location,
            "timestamp": now.isoformat(),
            "wind_speed": round(rng.random() * 15 + 5),    # 5-20 mph
            "pressure": round(rng.random() * 5 + 29.5, 2),  # inHg
            "visibility": round(rng.random() * 5 + 5),     # miles
            "uv_index": round(rng.random() * 10 + 1),
        }

    async def get_forecast(self, days: int = 5, location: Optional[str] = None) -> Dict[str, Any]:
        location = location or self.location
        start = self._now()
        forecast: List[Dict[str, Any]] = []
        for i in range(max(0, days)):
            day = start + timedelta(days=i)
            rng = self._rng(location, day.date(), "forecast")
            reading = rng.choice(MOCK_CONDITIONS)
            forecast.append({
                "date": day.isoformat(),
                **reading,
                "high_temp": reading["temperature"] + round(rng.random() * 10),
                "low_temp": reading["temperature"] - round(rng.random() * 15),
                "chance_of_rain": round(rng.random() * 100),
                "wind_speed": round(rng.random() * 20 + 5),
            })
        return {"location": location, "forecast": forecast}

    async def get_alerts(self, location: Optional[str] = None) -> List[Dict[str, Any]]:
        location = location or self.location
        now = self._now()
        rng = self._rng(location, now.date(), "alerts")
        if rng.random() >= ALERT_CHANCE:
            return []

        alert = rng.choice(ALERT_TYPES)
        log.info("Weather alert issued", extra={"entity": "weather", "state": alert["type"]})
        return [{
            "id": str(uuid.uuid4()),
            **alert,
            "start_time": now.isoformat(),
            "end_time": (now + timedelta(hours=24)).isoformat(),
            "location": location,
        }]

    async def get_historical(
        self,
        start_date: date,
        end_date: date,
        location: Optional[str] = None,
    ) -> Dict[str, Any]:
        location = location or self.location
        data = []
        day = start_date
        while day <= end_date:
            rng = self._rng(location, day, "historical")
            reading = rng.choice(MOCK_CONDITIONS)
            data.append({
                "date": day.isoformat(),
                **reading,
                "high_temp": reading["temperature"] + round(rng.random() * 10),
                "low_temp": reading["temperature"] - round(rng.random() * 15),
                "precipitation": round(rng.random() * 0.5, 2) if reading["condition"] == "rainy" else 0,
                "wind_speed": round(rng.random() * 25 + 5),
            })
            day += timedelta(days=1)

        return {
            "location": location,
            "period": {"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
            "data": data,
        }
