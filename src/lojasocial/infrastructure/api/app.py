"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from lojasocial.domain.repository.unit_of_work import UnitOfWork
from lojasocial.domain.service.notifier import Notifier
from lojasocial.infrastructure import bootstrap
from lojasocial.infrastructure.api import products_router, requests_router, stock_router
from lojasocial.infrastructure.api.errors import install_error_handlers
from lojasocial.infrastructure.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    uow: UnitOfWork | None = None,
    notifier: Notifier | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the API. Collaborators default to the configured ones."""
    settings = settings or get_settings()

    app = FastAPI(title="Loja Social - Requests & Stock")
    app.state.settings = settings
    app.state.uow = uow if uow is not None else bootstrap.unit_of_work()
    app.state.notifier = notifier if notifier is not None else bootstrap.notifier()

    install_error_handlers(app)
    app.include_router(requests_router.router)
    app.include_router(stock_router.router)
    app.include_router(products_router.router)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    logger.info("API ready (store=%s)", settings.store_path)
    return app
