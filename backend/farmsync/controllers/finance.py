# backend/farmsync/controllers/finance.py

from datetime import datetime
from typing import Any, Dict, List, Optional

from farmsync.controllers.base import PageController
from farmsync.services import filter_service as fs
from farmsync.services.aggregate_service import (
    aggregate_by_category,
    compute_totals,
    largest_bucket,
    monthly_trend,
    sum_amounts,
)
from farmsync.services.categories import ALL, EXPENSE_CATEGORIES, INCOME_SOURCES, lookup
from farmsync.services.export_service import crop_name, farm_name


class ExpensesController(PageController):
    page = "expenses"
    sources = ("expenses", "farms")
    error_message = "Failed to load expenses"

    def view_model(
        self,
        category: str = ALL,
        date_range: str = fs.DateRange.this_month.value,
        start: Any = None,
        end: Any = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        farms = self.data.get("farms", [])
        filtered = fs.filter_by_category(self.data.get("expenses", []), category)
        filtered = fs.filter_by_date_range(filtered, date_range, now=now, start=start, end=end)
        filtered = fs.sort_by_date_descending(filtered)

        breakdown = aggregate_by_category(filtered, EXPENSE_CATEGORIES)
        top = largest_bucket(breakdown)
        return {
            "filters": {"category": category or ALL, "date_range": fs.DateRange(date_range).value},
            "expenses": [
                {
                    **e,
                    "farm_name": farm_name(e.get("farm_id"), farms),
                    "category_style": lookup(EXPENSE_CATEGORIES, e.get("category")).as_dict(),
                }
                for e in filtered
            ],
            "stats": {
                "total": sum_amounts(filtered),
                "count": len(filtered),
                "top_category": top["label"] if top else None,
            },
            "by_category": breakdown,
            "categories": [c.as_dict() for c in EXPENSE_CATEGORIES],
        }


class IncomeController(PageController):
    """Crop income page: income vs expenses for a year (and optionally one month)."""

    page = "income"
    sources = ("income", "expenses", "crops", "farms")
    error_message = "Failed to load income data"

    def available_years(self) -> List[int]:
        years = set()
        for r in [*self.data.get("income", []), *self.data.get("expenses", [])]:
            d = fs.parse_date(r.get("date"))
            if d is not None:
                years.add(d.year)
        return sorted(years, reverse=True)

    def view_model(self, year: Optional[int] = None, month: Optional[int] = None) -> Dict[str, Any]:
        year = year or datetime.now().year
        farms = self.data.get("farms", [])
        crops = self.data.get("crops", [])

        income = fs.sort_by_date_descending(fs.filter_by_period(self.data.get("income", []), year, month))
        expenses = fs.filter_by_period(self.data.get("expenses", []), year, month)

        return {
            "filters": {"year": year, "month": month},
            "available_years": self.available_years(),
            "totals": compute_totals(income, expenses),
            "income": [
                {
                    **i,
                    "farm_name": farm_name(i.get("farm_id"), farms) if i.get("farm_id") else None,
                    "crop_name": crop_name(i.get("crop_id"), crops) or None,
                    "source_label": lookup(INCOME_SOURCES, i.get("source")).label,
                }
                for i in income
            ],
            "by_source": aggregate_by_category(income, INCOME_SOURCES, field="source"),
            "monthly_trend": monthly_trend(income, expenses, year),
            "sources": [s.as_dict() for s in INCOME_SOURCES],
        }
