# backend/farmsync/services/filter_service.py

"""
Filtering and ordering of in-memory record lists.

Every function is pure: it takes a list of records (dicts or objects with
attributes) plus filter parameters and returns a new list. Records with a
missing or unparseable date never match a date filter; they are dropped,
not raised on.
"""

from datetime import datetime, date, time, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple
import calendar
import enum

from farmsync.services.categories import ALL


class DateRange(str, enum.Enum):
    this_month = "this_month"
    last_30_days = "last_30_days"
    last_90_days = "last_90_days"
    all_time = "all_time"
    custom = "custom"


class TaskView(str, enum.Enum):
    all = "all"
    pending = "pending"
    completed = "completed"
    overdue = "overdue"
    today = "today"


class StageGroup(str, enum.Enum):
    all = "all"
    ready = "ready"
    growing = "growing"
    harvested = "harvested"


ROLLING_WINDOWS = {
    DateRange.last_30_days.value: 30,
    DateRange.last_90_days.value: 90,
}

STAGE_GROUPS = {
    StageGroup.ready.value: {"ready_to_harvest"},
    StageGroup.growing.value: {"planted", "germinated", "growing", "flowering", "fruiting"},
    StageGroup.harvested.value: {"harvested"},
}


# ----------------------------
# Helpers
# ----------------------------
def field_value(record: Any, field: str) -> Any:
    if record is None:
        return None
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def parse_date(value: Any) -> Optional[datetime]:
    """
    Accepts datetime, date or ISO-8601 strings (``2024-03-01``,
    ``2024-03-01T10:00:00Z``). Aware values are converted to naive UTC.
    Returns None for anything unparseable.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999999)


def month_bounds(now: datetime) -> Tuple[datetime, datetime]:
    start = datetime(now.year, now.month, 1)
    last_day = calendar.monthrange(now.year, now.month)[1]
    return start, _end_of_day(datetime(now.year, now.month, last_day))


def date_range_bounds(
    range_kind: str,
    now: Optional[datetime] = None,
    start: Any = None,
    end: Any = None,
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """(lower, upper) inclusive bounds for a named range; None means open."""
    kind = DateRange(range_kind).value
    now = now or datetime.now()

    if kind == DateRange.all_time.value:
        return None, None
    if kind == DateRange.this_month.value:
        return month_bounds(now)
    if kind in ROLLING_WINDOWS:
        return now - timedelta(days=ROLLING_WINDOWS[kind]), None

    lower = parse_date(start)
    upper = parse_date(end)
    # a bare end date covers that whole day
    if upper is not None and upper.time() == time.min:
        upper = _end_of_day(upper)
    return lower, upper


# ----------------------------
# Generic filters
# ----------------------------
def filter_by_category(records: Iterable[Any], category: Optional[str], field: str = "category") -> List[Any]:
    records = list(records)
    if category in (None, "", ALL):
        return records
    return [r for r in records if field_value(r, field) == category]


def filter_by_field(records: Iterable[Any], field: str, value: Any) -> List[Any]:
    """Loose equality on ids: ``"7"`` matches ``7``; None matches nothing."""
    if value is None:
        return []
    wanted = str(value)
    return [
        r for r in records
        if field_value(r, field) is not None and str(field_value(r, field)) == wanted
    ]


def filter_by_date_range(
    records: Iterable[Any],
    range_kind: str = DateRange.all_time.value,
    date_field: str = "date",
    now: Optional[datetime] = None,
    start: Any = None,
    end: Any = None,
) -> List[Any]:
    records = list(records)
    if DateRange(range_kind) is DateRange.all_time:
        return records

    lower, upper = date_range_bounds(range_kind, now=now, start=start, end=end)
    out = []
    for r in records:
        d = parse_date(field_value(r, date_field))
        if d is None:
            continue
        if lower is not None and d < lower:
            continue
        if upper is not None and d > upper:
            continue
        out.append(r)
    return out


def filter_by_period(
    records: Iterable[Any],
    year: Optional[int] = None,
    month: Optional[int] = None,
    date_field: str = "date",
) -> List[Any]:
    records = list(records)
    if not year and not month:
        return records

    out = []
    for r in records:
        d = parse_date(field_value(r, date_field))
        if d is None:
            continue
        if year and d.year != int(year):
            continue
        if month and d.month != int(month):
            continue
        out.append(r)
    return out


def sort_by_date_descending(records: Iterable[Any], date_field: str = "date") -> List[Any]:
    """Newest first. Stable for equal dates; undated records go last, in input order."""
    def key(r):
        d = parse_date(field_value(r, date_field))
        return (d is not None, d or datetime.min)

    return sorted(records, key=key, reverse=True)


# ----------------------------
# Tasks
# ----------------------------
def is_task_completed(task: Any) -> bool:
    status = field_value(task, "status")
    if status is not None:
        return status == "completed"
    return bool(field_value(task, "completed"))


def filter_tasks(tasks: Iterable[Any], view: str = TaskView.all.value, now: Optional[datetime] = None) -> List[Any]:
    view = TaskView(view).value
    now = now or datetime.now()
    out = []
    for t in tasks:
        if t is None:
            continue
        done = is_task_completed(t)
        if view == TaskView.pending.value and done:
            continue
        if view == TaskView.completed.value and not done:
            continue
        if view in (TaskView.overdue.value, TaskView.today.value):
            due = parse_date(field_value(t, "due_date"))
            if due is None or done:
                continue
            is_today = due.date() == now.date()
            if view == TaskView.today.value and not is_today:
                continue
            if view == TaskView.overdue.value and (is_today or due >= now):
                continue
        out.append(t)
    return out


def sort_tasks(tasks: Iterable[Any]) -> List[Any]:
    """Open tasks first, then by due date ascending; undated tasks last."""
    def key(t):
        due = parse_date(field_value(t, "due_date"))
        return (is_task_completed(t), due or datetime.max)

    return sorted((t for t in tasks if t is not None), key=key)


def upcoming_tasks(tasks: Iterable[Any], days: int = 7, now: Optional[datetime] = None) -> List[Any]:
    now = now or datetime.now()
    horizon = now + timedelta(days=days)
    out = []
    for t in tasks:
        if t is None or is_task_completed(t):
            continue
        due = parse_date(field_value(t, "due_date"))
        if due is not None and now <= due <= horizon:
            out.append(t)
    return sorted(out, key=lambda t: parse_date(field_value(t, "due_date")))


# ----------------------------
# Crops
# ----------------------------
def filter_crops_by_stage_group(crops: Iterable[Any], group: str = StageGroup.all.value) -> List[Any]:
    group = StageGroup(group).value
    crops = list(crops)
    if group == StageGroup.all.value:
        return crops
    stages = STAGE_GROUPS[group]
    return [c for c in crops if field_value(c, "growth_stage") in stages]


def count_by_stage_group(crops: Iterable[Any]) -> Dict[str, int]:
    crops = list(crops)
    return {g.value: len(filter_crops_by_stage_group(crops, g.value)) for g in StageGroup}
