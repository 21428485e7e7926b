"""FastAPI dependencies: the collaborators wired into ``app.state``."""

from __future__ import annotations

from fastapi import Request

from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.notifier import Notifier
from lojasocial.infrastructure.config import Settings


def get_uow(request: Request) -> UnitOfWork:
    return request.app.state.uow


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
