"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from lojasocial.domain.service.notifier import Notifier
from lojasocial.infrastructure.config import get_settings
from lojasocial.infrastructure.notifiers import JsonlEventNotifier, LoggingNotifier
from lojasocial.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


@lru_cache
def unit_of_work() -> JsonUnitOfWork:
    # One instance per process so every handler shares the same lock.
    return JsonUnitOfWork(get_settings().store_path)


def notifier() -> Notifier:
    settings = get_settings()
    if settings.event_log_file is not None:
        return JsonlEventNotifier(settings.event_log_file)
    return LoggingNotifier()
