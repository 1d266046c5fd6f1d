# backend/farmsync/controllers/dashboard.py

from datetime import datetime
from typing import Any, Dict, Optional

from farmsync.controllers.base import PageController
from farmsync.services import filter_service as fs
from farmsync.services.aggregate_service import sum_amounts
from farmsync.services.categories import EXPENSE_CATEGORIES, lookup
from farmsync.services.export_service import farm_name

RECENT_EXPENSES = 5
UPCOMING_DAYS = 7


class DashboardController(PageController):
    page = "dashboard"
    sources = ("farms", "crops", "tasks", "expenses")
    error_message = "Failed to load dashboard data"

    def fetchers(self):
        fetchers = super().fetchers()
        fetchers["weather"] = self.gateways.weather.get_current_weather
        return fetchers

    def view_model(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or datetime.now()
        farms = self.data.get("farms", [])
        crops = self.data.get("crops", [])
        tasks = self.data.get("tasks", [])
        expenses = self.data.get("expenses", [])

        this_month = fs.filter_by_date_range(expenses, fs.DateRange.this_month.value, now=now)
        recent = fs.sort_by_date_descending(expenses)[:RECENT_EXPENSES]

        return {
            "stats": {
                "total_farms": len(farms),
                # every crop on record counts as active, harvested ones included
                "active_crops": len(crops),
                "pending_tasks": sum(1 for t in tasks if not fs.is_task_completed(t)),
                "monthly_expenses": sum_amounts(this_month),
            },
            "recent_expenses": [
                {
                    **e,
                    "farm_name": farm_name(e.get("farm_id"), farms),
                    "category_label": lookup(EXPENSE_CATEGORIES, e.get("category")).label,
                }
                for e in recent
            ],
            "upcoming_tasks": fs.upcoming_tasks(tasks, days=UPCOMING_DAYS, now=now),
            "weather": self.data.get("weather"),
        }
