import click

from lojasocial.infrastructure.cli.product_commands import product_add, product_list
from lojasocial.infrastructure.cli.request_commands import (
    request_accept,
    request_cancel,
    request_complete,
    request_list,
    request_propose_date,
    request_reject,
    request_show,
    request_submit,
)
from lojasocial.infrastructure.cli.stock_commands import (
    stock_check,
    stock_expiring,
    stock_receive,
    stock_show,
)
from lojasocial.infrastructure.config import get_settings
from lojasocial.infrastructure.logging_config import setup_logging


@click.group()
def cli() -> None:
    """Loja Social - requests and stock reservations"""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir)


@cli.group()
def request() -> None:
    """Manage pickup requests."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def stock() -> None:
    """Manage stock batches."""


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to settings).")
@click.option("--port", type=int, default=None, help="Port (defaults to settings).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "lojasocial.infrastructure.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_config=None,
    )


# Register subcommands
request.add_command(request_accept)
request.add_command(request_cancel)
request.add_command(request_complete)
request.add_command(request_list)
request.add_command(request_propose_date)
request.add_command(request_reject)
request.add_command(request_show)
request.add_command(request_submit)
product.add_command(product_add)
product.add_command(product_list)
stock.add_command(stock_check)
stock.add_command(stock_expiring)
stock.add_command(stock_receive)
stock.add_command(stock_show)
