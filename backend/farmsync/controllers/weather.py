# backend/farmsync/controllers/weather.py

from typing import Any, Dict, Optional

from farmsync.controllers.base import PageController
from farmsync.services.advisory_service import advice_color, forecast_stats, get_farming_advice

FORECAST_DAYS = 5


class WeatherController(PageController):
    page = "weather"
    error_message = "Failed to load weather data"

    def __init__(self, gateways, location: Optional[str] = None):
        super().__init__(gateways)
        self.location = location

    def fetchers(self):
        weather = self.gateways.weather
        return {
            "current": lambda: weather.get_current_weather(self.location),
            "forecast": lambda: weather.get_forecast(FORECAST_DAYS, self.location),
            "alerts": lambda: weather.get_alerts(self.location),
        }

    def view_model(self) -> Dict[str, Any]:
        current = self.data.get("current")
        forecast = (self.data.get("forecast") or {}).get("forecast", [])
        advice = [{**a, "color": advice_color(a["type"])} for a in get_farming_advice(current)]
        return {
            "current": current,
            "forecast": forecast,
            "alerts": self.data.get("alerts", []),
            "advice": advice,
            "stats": forecast_stats(forecast),
        }
