from __future__ import annotations

from collections import deque
from datetime import datetime, timezone

from loginkit.core.logging import DOMAIN_ALERTS, get_domain_logger
from loginkit.core.settings import settings

ALERT_LEVELS = ("success", "error", "info", "warning")

logger = get_domain_logger(__name__, DOMAIN_ALERTS)


class AlertEngine:
    """User-facing alerts raised by page handlers, newest first."""

    def __init__(self, buffer_size: int | None = None):
        self._max = buffer_size or settings.alert_buffer_size
        self._buffer: deque[dict] = deque(maxlen=self._max)

    def show_alert(
        self,
        message: str,
        level: str = "info",
        *,
        client_id: str | None = None,
        metadata: dict | None = None,
    ) -> dict:
        if level not in ALERT_LEVELS:
            raise ValueError(f"unknown alert level: {level!r}")
        alert = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "message": message,
            "level": level,
            "client_id": client_id,
            "metadata": metadata or {},
        }
        self._buffer.appendleft(alert)
        logger.info("alert level=%s client=%s message=%s", level, client_id, message)
        return alert

    def list_alerts(self, limit: int = 50, client_id: str | None = None) -> list[dict]:
        items = list(self._buffer)
        if client_id is not None:
            items = [item for item in items if item["client_id"] == client_id]
        return items[: max(1, min(limit, self._max))]

    def clear(self) -> None:
        self._buffer.clear()


alert_engine = AlertEngine()
