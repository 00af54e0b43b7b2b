# Overview: State controller for a dashboard resource page (list, search, paging, modal form, delete).

"""
Resource page controller

Drives one REST collection the way a dashboard screen does, without any UI:

    page = ResourcePage(ResourceClient(api, "/api/pos/tax-rates"))
    page.mount()                 # page 1
    page.set_keyword("va")       # debounced, then page 1
    page.go_to_page(2)
    page.open_create(); page.submit({"name": "VAT", "rate": 15})
    page.delete(record_id)

A view layer reads records / current_page / total_pages / loading /
errors / notification / modal_open and renders them.

Every list fetch is tagged with a generation number; only the response of
the newest fetch is applied, so a slow stale response can never overwrite a
newer one. Failures set `notification` and leave the list state untouched.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .http import ApiError, ApiValidationError
from .resource_client import ResourceClient


logger = logging.getLogger(__name__)

SEARCH_DEBOUNCE_SECONDS = 0.5
DEFAULT_PER_PAGE = 10


@dataclass(frozen=True)
class Notification:
    message: str
    type: str  # "success" | "error"


def timer_scheduler(delay: float, callback: Callable[[], Any]):
    """Default scheduler: run callback on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class Debouncer:
    """
    Collapses bursts of calls into one call after `delay` seconds of quiet.

    `scheduler(delay, callback)` must return a handle with cancel().
    """

    def __init__(self, delay: float = SEARCH_DEBOUNCE_SECONDS, scheduler=timer_scheduler):
        self.delay = delay
        self.scheduler = scheduler
        self._pending = None
        self._lock = threading.Lock()

    def __call__(self, callback: Callable[[], Any]) -> None:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            self._pending = self.scheduler(self.delay, callback)

    def cancel(self) -> None:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None


class ResourcePage:
    def __init__(
        self,
        resource: ResourceClient,
        *,
        per_page: int = DEFAULT_PER_PAGE,
        filters: Optional[dict] = None,
        debouncer: Optional[Debouncer] = None,
    ):
        self.resource = resource
        self.per_page = per_page
        self.filters = dict(filters or {})
        self.debouncer = debouncer or Debouncer()

        self.keyword = ""
        self.records: list[dict] = []
        self.current_page = 1
        self.total_pages = 1
        self.total_items = 0
        self.loading = False

        self.modal_open = False
        self.editing: Optional[dict] = None
        self.errors: dict[str, list[str]] = {}
        self.notification: Optional[Notification] = None

        self._generation = 0
        self._lock = threading.Lock()

    # --- list ---

    def mount(self) -> bool:
        return self.fetch(1)

    def fetch(self, page: Optional[int] = None) -> bool:
        """
        Load a page. Returns True when this response was applied to state,
        False when it failed or was superseded by a newer fetch.
        """
        page = page or self.current_page
        with self._lock:
            self._generation += 1
            token = self._generation
            self.loading = True

        try:
            result = self.resource.list(
                page=page,
                limit=self.per_page,
                keyword=self.keyword,
                **self.filters,
            )
        except ApiError as e:
            with self._lock:
                if token != self._generation:
                    return False
                self.loading = False
                self.notify(e.message, "error")
            return False

        with self._lock:
            if token != self._generation:
                logger.debug("Discarding stale page response (generation %s < %s)", token, self._generation)
                return False
            self.records = list(result.get("data") or [])
            self.current_page = result.get("current_page", page)
            self.total_pages = result.get("total_pages", 1)
            self.total_items = result.get("total_items", len(self.records))
            self.loading = False
        return True

    def set_keyword(self, keyword: str) -> None:
        self.keyword = keyword
        self.debouncer(lambda: self.fetch(1))

    def go_to_page(self, page: int) -> bool:
        if page < 1 or page > self.total_pages:
            return False
        return self.fetch(page)

    # --- modal form ---

    def open_create(self) -> None:
        self.editing = None
        self.errors = {}
        self.modal_open = True

    def open_edit(self, record: dict) -> None:
        self.editing = record
        self.errors = {}
        self.modal_open = True

    def close_modal(self) -> None:
        self.editing = None
        self.errors = {}
        self.modal_open = False

    def submit(self, form: dict) -> bool:
        try:
            if self.editing is not None:
                self.resource.update(self.editing["id"], form)
                message = "Record updated successfully"
            else:
                self.resource.create(form)
                message = "Record created successfully"
        except ApiValidationError as e:
            self.errors = e.errors
            self.notify(e.message, "error")
            return False
        except ApiError as e:
            self.notify(e.message, "error")
            return False

        self.close_modal()
        self.notify(message, "success")
        self.fetch(self.current_page)
        return True

    # --- delete ---

    def delete(self, record_id: int) -> bool:
        try:
            self.resource.delete(record_id)
        except ApiError as e:
            self.notify(e.message, "error")
            return False

        page = self.current_page
        if page > 1 and len(self.records) <= 1:
            page -= 1
        self.notify("Record deleted successfully", "success")
        self.fetch(page)
        return True

    def notify(self, message: str, type_: str) -> None:
        self.notification = Notification(message, type_)

    def dismiss_notification(self) -> None:
        self.notification = None
