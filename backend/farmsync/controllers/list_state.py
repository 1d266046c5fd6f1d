# backend/farmsync/controllers/list_state.py

"""Reconcile a page's local record list with a confirmed gateway result."""

from typing import Any, Dict, List, Optional

from farmsync.services.filter_service import field_value


def _same_id(record: Any, record_id: Any) -> bool:
    rid = field_value(record, "id")
    return rid is not None and str(rid) == str(record_id)


def append_record(records: Optional[List[Dict]], record: Dict) -> List[Dict]:
    return [*(records or []), record]


def replace_record(records: Optional[List[Dict]], record: Dict) -> List[Dict]:
    """Swap the entry with the same id; an unknown id leaves the list as is."""
    record_id = field_value(record, "id")
    return [record if _same_id(r, record_id) else r for r in (records or [])]


def remove_record(records: Optional[List[Dict]], record_id: Any) -> List[Dict]:
    return [r for r in (records or []) if not _same_id(r, record_id)]


def find_record(records: Optional[List[Dict]], record_id: Any) -> Optional[Dict]:
    for r in records or []:
        if _same_id(r, record_id):
            return r
    return None
