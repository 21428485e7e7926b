"""Shared click helpers for the command modules."""

from __future__ import annotations

from datetime import datetime, timezone

import click

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]


def utc_datetime(
    ctx: click.Context, param: click.Parameter, value: datetime | None
) -> datetime | None:
    """Callback for ``click.DateTime`` options: dates typed on the CLI are UTC."""
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)


def fmt_date(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value is not None else "-"
