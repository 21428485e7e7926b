"""Notifier adapters.

Push delivery is handled outside this service; here events are either
written to the log or appended to a JSON-lines file that a delivery
worker can tail.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from lojasocial.domain.service.notifier import EventType, Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):

    def notify(self, event_type: EventType, payload: dict[str, Any]) -> None:
        logger.info("Event %s: %s", event_type.value, payload)


class JsonlEventNotifier(Notifier):
    """Append one JSON line per event, flushed and fsynced."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def notify(self, event_type: EventType, payload: dict[str, Any]) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(
            {
                "type": event_type.value,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "payload": payload,
            },
            ensure_ascii=False,
        )
        with open(self._file_path, "a", encoding="utf-8", newline="\n") as f:
            f.write(line + "\n")
            f.flush()
            os.fsync(f.fileno())
        logger.debug("Event %s appended to %s", event_type.value, self._file_path)
