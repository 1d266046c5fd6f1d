# backend/farmsync/controllers/base.py

"""
Page controller lifecycle.

    idle -> loading -> ready | error

``load()`` fetches every source the page depends on concurrently. A source
that raises or answers ``None`` puts the page into ``error`` with a
user-facing message; ``retry()`` simply loads again. Results that arrive
after ``unmount()`` (or after a newer load started) are dropped.

Mutations are validated first, then sent to the gateway. Only a confirmed
record is spliced into the local list; a failure records a notification and
leaves the list untouched.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional
import asyncio
import enum

from pydantic import ValidationError

from farmsync.controllers.list_state import append_record, remove_record, replace_record
from farmsync.core.logger import get_logger
from farmsync.services.categories import humanize

logger = get_logger("controllers")

Fetcher = Callable[[], Awaitable[Any]]


class PageState(str, enum.Enum):
    idle = "idle"
    loading = "loading"
    ready = "ready"
    error = "error"


@dataclass
class Notification:
    level: str  # success | error | info
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "message": self.message, "created_at": self.created_at.isoformat()}


class PageController:
    page: str = "page"
    sources: tuple = ()
    error_message: str = "Failed to load data"

    def __init__(self, gateways):
        self.gateways = gateways
        self.state = PageState.idle
        self.error: Optional[str] = None
        self.data: Dict[str, Any] = {}
        self.notifications: List[Notification] = []
        self._mounted = True
        self._generation = 0

    # ----------------------------
    # Lifecycle
    # ----------------------------
    @property
    def mounted(self) -> bool:
        return self._mounted

    def unmount(self) -> None:
        self._mounted = False

    def fetchers(self) -> Dict[str, Fetcher]:
        return {name: self.gateways.get(name).get_all for name in self.sources}

    def _log_extra(self, **kw) -> Dict[str, Any]:
        return {"page": self.page, "state": self.state.value, **kw}

    async def load(self) -> PageState:
        if not self._mounted:
            return self.state

        self._generation += 1
        generation = self._generation
        self.state = PageState.loading
        self.error = None

        fetchers = self.fetchers()
        names = list(fetchers)
        results = await asyncio.gather(*(f() for f in fetchers.values()), return_exceptions=True)

        if not self._mounted or generation != self._generation:
            logger.debug("Discarding stale load result", extra=self._log_extra())
            return self.state

        failed = []
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                logger.error(
                    "Source %s raised during load", name,
                    exc_info=(type(result), result, result.__traceback__),
                    extra=self._log_extra(entity=name),
                )
                failed.append(name)
            elif result is None:
                failed.append(name)

        if failed:
            self.state = PageState.error
            self.error = self.error_message
            self.notify("error", self.error_message)
            logger.warning("Page load failed", extra=self._log_extra(entity=",".join(failed)))
            return self.state

        self.data = dict(zip(names, results))
        self.after_load()
        if self.state is PageState.loading:
            self.state = PageState.ready
        logger.info("Page loaded", extra=self._log_extra())
        return self.state

    async def retry(self) -> PageState:
        return await self.load()

    def after_load(self) -> None:
        """Hook for pages that derive extra state (or an error) from the loaded data."""

    def fail(self, message: str) -> None:
        self.state = PageState.error
        self.error = message

    # ----------------------------
    # Notifications
    # ----------------------------
    def notify(self, level: str, message: str) -> Notification:
        note = Notification(level, message)
        self.notifications.append(note)
        return note

    def drain_notifications(self) -> List[Notification]:
        notes, self.notifications = self.notifications, []
        return notes

    # ----------------------------
    # Mutations
    # ----------------------------
    def validate(self, source: str, data: Any, partial: bool = False):
        """Returns (payload, errors); payload is None when validation failed."""
        gateway = self.gateways.get(source)
        schema = gateway.update_schema if partial else gateway.create_schema
        try:
            return schema.model_validate(data), []
        except ValidationError as exc:
            return None, exc.errors()

    def _label(self, source: str) -> str:
        return humanize(self.gateways.get(source).name)

    def _splice(self, source: str, fn, arg) -> None:
        if self._mounted and source in self.data:
            self.data[source] = fn(self.data[source], arg)

    async def create(self, source: str, data: Any) -> Optional[Dict]:
        payload, errors = self.validate(source, data)
        if payload is None:
            logger.info(
                "Rejected %s form: %s", source, errors[0].get("msg"),
                extra=self._log_extra(entity=source),
            )
            self.notify("error", "Please fill in all required fields")
            return None

        record = await self.gateways.get(source).create(payload)
        if record is None:
            self.notify("error", f"Failed to save {self._label(source).lower()}")
            return None

        self._splice(source, append_record, record)
        self.notify("success", f"{self._label(source)} created successfully!")
        return record

    async def update(self, source: str, record_id: str, data: Any) -> Optional[Dict]:
        payload, errors = self.validate(source, data, partial=True)
        if payload is None:
            logger.info(
                "Rejected %s form: %s", source, errors[0].get("msg"),
                extra=self._log_extra(entity=source),
            )
            self.notify("error", "Please fill in all required fields")
            return None

        record = await self.gateways.get(source).update(record_id, payload)
        if record is None:
            self.notify("error", f"Failed to save {self._label(source).lower()}")
            return None

        self._splice(source, replace_record, record)
        self.notify("success", f"{self._label(source)} updated successfully!")
        return record

    async def delete(self, source: str, record_id: str) -> bool:
        ok = await self.gateways.get(source).delete(record_id)
        if not ok:
            self.notify("error", f"Failed to delete {self._label(source).lower()}")
            return False

        # an id that is not in the local list leaves it unchanged
        self._splice(source, remove_record, record_id)
        self.notify("success", f"{self._label(source)} deleted successfully!")
        return True

    # ----------------------------
    # Rendering
    # ----------------------------
    def view_model(self, **filters) -> Dict[str, Any]:
        raise NotImplementedError

    def snapshot(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "state": self.state.value,
            "error": self.error,
            "notifications": [n.as_dict() for n in self.notifications],
        }
