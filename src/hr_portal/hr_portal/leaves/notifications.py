"""Outbound leave-decision notifications.

Delivery is fire-and-forget: the decision is already committed when a
notification is queued, and delivery failures are logged and dropped.
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from datetime import date
from typing import Optional, Protocol

import requests

from ..core.enums import LeaveStatus, LeaveType

logger = logging.getLogger(__name__)

_STOP = object()


@dataclass(frozen=True)
class DecisionNotification:
    employee_code: str
    name: str
    email: str
    leave_type: LeaveType
    from_date: date
    to_date: date
    status: LeaveStatus
    admin_comment: Optional[str] = None

    def to_payload(self) -> dict:
        return {
            "employee_id": self.employee_code,
            "name": self.name,
            "email": self.email,
            "leave_type": self.leave_type.value,
            "from_date": self.from_date.isoformat(),
            "to_date": self.to_date.isoformat(),
            "status": self.status.value,
            "admin_comment": self.admin_comment or "",
        }


class Notifier(Protocol):
    def enqueue(self, notification: DecisionNotification) -> bool:
        """Hand off for delivery. Must not block and must not raise."""

        raise NotImplementedError

    def close(self, timeout: float | None = None) -> None:
        raise NotImplementedError


class NullNotifier:
    """Used when no webhook endpoint is configured."""

    def enqueue(self, notification: DecisionNotification) -> bool:
        logger.debug("Notifications disabled, dropping %s decision for %s", notification.status.value, notification.email)
        return False

    def close(self, timeout: float | None = None) -> None:
        return None


class WebhookNotifier:
    """POSTs decision payloads from a single background worker thread."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
        max_queue: int = 1000,
    ):
        self._url = url
        self._timeout = float(timeout)
        self._session = session or requests.Session()
        self._queue: queue.Queue = queue.Queue(maxsize=int(max_queue))
        self._lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._worker is None or not self._worker.is_alive():
                self._worker = threading.Thread(target=self._run, name="leave-decision-notifier", daemon=True)
                self._worker.start()

    def enqueue(self, notification: DecisionNotification) -> bool:
        self._ensure_worker()
        try:
            self._queue.put_nowait(notification)
        except queue.Full:
            logger.warning("Notification queue full, dropping decision for %s", notification.email)
            return False
        return True

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._deliver(item)
            finally:
                self._queue.task_done()

    def _deliver(self, notification: DecisionNotification) -> None:
        try:
            response = self._session.post(self._url, json=notification.to_payload(), timeout=self._timeout)
            logger.info(
                "Sent %s decision for %s (HTTP %s)",
                notification.status.value,
                notification.email,
                response.status_code,
            )
        except Exception:
            # The worker must outlive any single failed delivery.
            logger.exception("Failed to deliver leave decision for %s", notification.email)

    def close(self, timeout: float | None = None) -> None:
        """Deliver what is queued, then stop the worker."""

        with self._lock:
            worker = self._worker
        if worker is None or not worker.is_alive():
            return
        self._queue.put(_STOP)
        worker.join(timeout)


def build_notifier(url: str | None, *, timeout: float = 5.0) -> Notifier:
    if not (url or "").strip():
        return NullNotifier()
    return WebhookNotifier(url.strip(), timeout=timeout)
