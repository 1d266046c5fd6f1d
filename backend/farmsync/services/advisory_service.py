# backend/farmsync/services/advisory_service.py

"""
Weather-linked farming advice.

Rules (checked in order, several may apply):
 - rainy                      -> indoor tasks (info)
 - sunny and above 85F        -> water early / late (warning)
 - sunny otherwise            -> good day for field work (success)
 - humidity above 80%         -> disease risk (warning)
 - wind above 15 mph          -> secure equipment (warning)
"""

from typing import Any, Dict, List, Optional

from farmsync.services.aggregate_service import to_amount

HOT_DAY_F = 85
HUMID_PCT = 80
WINDY_MPH = 15

ADVICE_COLORS = {
    "success": "bg-green-50 border-green-200 text-green-800",
    "warning": "bg-yellow-50 border-yellow-200 text-yellow-800",
    "info": "bg-blue-50 border-blue-200 text-blue-800",
}
DEFAULT_ADVICE_COLOR = "bg-gray-50 border-gray-200 text-gray-800"


def _advice(icon: str, text: str, kind: str) -> Dict[str, str]:
    return {"icon": icon, "text": text, "type": kind}


def get_farming_advice(weather: Optional[Dict[str, Any]]) -> List[Dict[str, str]]:
    if not weather:
        return []

    condition = weather.get("condition")
    temperature = to_amount(weather.get("temperature"))
    advice = []

    if condition == "rainy":
        advice.append(_advice("Droplets", "Good day for indoor tasks. Avoid heavy fieldwork.", "info"))
    elif condition == "sunny" and temperature > HOT_DAY_F:
        advice.append(_advice("Sun", "Hot day ahead. Water crops early morning or evening.", "warning"))
    elif condition == "sunny":
        advice.append(_advice("Sun", "Perfect weather for outdoor farm work!", "success"))

    if to_amount(weather.get("humidity")) > HUMID_PCT:
        advice.append(_advice("Droplets", "High humidity may increase disease risk. Monitor crops.", "warning"))

    if to_amount(weather.get("wind_speed")) > WINDY_MPH:
        advice.append(_advice("Wind", "Windy conditions. Secure equipment and check plant supports.", "warning"))

    return advice


def advice_color(kind: str) -> str:
    return ADVICE_COLORS.get(kind, DEFAULT_ADVICE_COLOR)


def forecast_stats(forecast: Optional[List[Dict[str, Any]]]) -> Dict[str, Any]:
    """Today's high / low / chance of rain; None when there is no forecast."""
    if not forecast:
        return {"todays_high": None, "todays_low": None, "chance_of_rain": None}
    today = forecast[0]
    return {
        "todays_high": today.get("high_temp"),
        "todays_low": today.get("low_temp"),
        "chance_of_rain": today.get("chance_of_rain"),
    }
