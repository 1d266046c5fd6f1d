# backend/farmsync/services/aggregate_service.py

"""
Totals and breakdowns for expense / income lists.

Amounts that cannot be read as numbers count as 0. Nothing here raises
on bad record data.
"""

from typing import Any, Dict, Iterable, List, Optional
import math

from farmsync.services.categories import CategoryDef, fallback_category
from farmsync.services.filter_service import field_value, parse_date

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def to_amount(value: Any) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount


def sum_amounts(records: Iterable[Any], field: str = "amount") -> float:
    return sum(to_amount(field_value(r, field)) for r in records)


def aggregate_by_category(
    records: Iterable[Any],
    category_defs: List[CategoryDef],
    include_empty: bool = False,
    field: str = "category",
) -> List[Dict[str, Any]]:
    """
    One bucket per known category (catalog order), then one per unknown
    value in order of first appearance. Bucket totals always add up to
    ``sum_amounts(records)``; zero-total buckets are dropped unless
    ``include_empty`` is set.
    """
    buckets: Dict[Any, Dict[str, Any]] = {}
    for d in category_defs:
        buckets[d.value] = {**d.as_dict(), "total": 0.0, "count": 0}

    for r in records:
        key = field_value(r, field)
        if key not in buckets:
            buckets[key] = {**fallback_category(key).as_dict(), "total": 0.0, "count": 0}
        buckets[key]["total"] += to_amount(field_value(r, "amount"))
        buckets[key]["count"] += 1

    return [b for b in buckets.values() if include_empty or b["total"] != 0]


def compute_totals(income: Iterable[Any], expenses: Iterable[Any]) -> Dict[str, float]:
    total_income = sum_amounts(income)
    total_expenses = sum_amounts(expenses)
    net_profit = total_income - total_expenses
    # no income -> 0% margin rather than a division error
    profit_margin = (net_profit / total_income) * 100 if total_income > 0 else 0.0
    return {
        "total_income": total_income,
        "total_expenses": total_expenses,
        "net_profit": net_profit,
        "profit_margin": profit_margin,
    }


def bucket_by_month(
    records: Iterable[Any],
    year: int,
    date_field: str = "date",
) -> List[Dict[str, Any]]:
    buckets = [
        {"month": i + 1, "label": MONTH_LABELS[i], "total": 0.0, "count": 0}
        for i in range(12)
    ]
    for r in records:
        d = parse_date(field_value(r, date_field))
        if d is None or d.year != int(year):
            continue
        b = buckets[d.month - 1]
        b["total"] += to_amount(field_value(r, "amount"))
        b["count"] += 1
    return buckets


def monthly_trend(income: Iterable[Any], expenses: Iterable[Any], year: int) -> List[Dict[str, Any]]:
    """Income, expenses and profit per calendar month, for the trend chart."""
    inc = bucket_by_month(income, year)
    exp = bucket_by_month(expenses, year)
    return [
        {
            "month": i["month"],
            "label": i["label"],
            "income": i["total"],
            "expenses": e["total"],
            "profit": i["total"] - e["total"],
        }
        for i, e in zip(inc, exp)
    ]


def largest_bucket(buckets: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not buckets:
        return None
    return max(buckets, key=lambda b: b["total"])
