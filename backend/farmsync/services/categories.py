# backend/farmsync/services/categories.py

"""
Display catalog for enumerated record values: labels, icons and colors
used by the dashboard pages, charts and exports.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional
import re


@dataclass(frozen=True)
class CategoryDef:
    value: Optional[str]
    label: str
    icon: str = "MoreHorizontal"
    color: str = "text-gray-600"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


FALLBACK_ICON = "MoreHorizontal"
FALLBACK_COLOR = "text-gray-600"

ALL = "all"

EXPENSE_CATEGORIES: List[CategoryDef] = [
    CategoryDef("seeds", "Seeds & Plants", "Sprout", "text-green-600"),
    CategoryDef("equipment", "Equipment", "Wrench", "text-blue-600"),
    CategoryDef("fertilizer", "Fertilizer", "Beaker", "text-purple-600"),
    CategoryDef("labor", "Labor", "Users", "text-orange-600"),
    CategoryDef("fuel", "Fuel", "Zap", "text-red-600"),
    CategoryDef("maintenance", "Maintenance", "Settings", "text-gray-600"),
    CategoryDef("other", "Other", "MoreHorizontal", "text-gray-600"),
]

INCOME_SOURCES: List[CategoryDef] = [
    CategoryDef("crop_sales", "Crop Sales", "Wheat", "text-green-600"),
    CategoryDef("direct_sales", "Direct Sales", "ShoppingCart", "text-blue-600"),
    CategoryDef("contracts", "Contract Sales", "FileText", "text-purple-600"),
    CategoryDef("subsidies", "Government Subsidies", "Landmark", "text-orange-600"),
    CategoryDef("insurance", "Insurance Payouts", "Shield", "text-red-600"),
    CategoryDef("grants", "Grants", "Award", "text-yellow-600"),
    CategoryDef("other", "Other Income", "MoreHorizontal", "text-gray-600"),
]

GROWTH_STAGES: List[CategoryDef] = [
    CategoryDef("planted", "Planted", "Sprout", "text-green-600"),
    CategoryDef("germinated", "Germinated", "Sprout", "text-green-600"),
    CategoryDef("growing", "Growing", "Leaf", "text-green-700"),
    CategoryDef("flowering", "Flowering", "Flower", "text-pink-600"),
    CategoryDef("fruiting", "Fruiting", "Apple", "text-red-600"),
    CategoryDef("ready_to_harvest", "Ready to Harvest", "Scissors", "text-orange-600"),
    CategoryDef("harvested", "Harvested", "CheckCircle", "text-gray-600"),
]

PRIORITIES: List[CategoryDef] = [
    CategoryDef("low", "Low", "ArrowDown", "bg-blue-100 text-blue-800"),
    CategoryDef("medium", "Medium", "Minus", "bg-yellow-100 text-yellow-800"),
    CategoryDef("high", "High", "ArrowUp", "bg-red-100 text-red-800"),
]

TASK_TYPES: List[str] = [
    "Watering", "Fertilizing", "Weeding", "Pruning", "Planting",
    "Harvesting", "Pest Control", "Soil Testing", "Equipment Maintenance",
]

_WORD_START = re.compile(r"\b\w")


def humanize(value: Any) -> str:
    """``ready_to_harvest`` -> ``Ready To Harvest``; ``None`` -> ``""``."""
    if value is None:
        return ""
    text = str(value).replace("_", " ")
    return _WORD_START.sub(lambda m: m.group(0).upper(), text)


def fallback_category(value: Any) -> CategoryDef:
    """Generic entry for a value the catalog does not know."""
    label = humanize(value) or "Uncategorized"
    return CategoryDef(value, label, FALLBACK_ICON, FALLBACK_COLOR)


def lookup(defs: List[CategoryDef], value: Any) -> CategoryDef:
    for d in defs:
        if d.value == value:
            return d
    return fallback_category(value)
