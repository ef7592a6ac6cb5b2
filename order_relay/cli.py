"""Click CLI for running and poking the order relay."""

from __future__ import annotations

import asyncio
import json

import click

from order_relay.config import ConfigurationError, RelaySettings
from order_relay.line.client import DeliveryError, LineMessagingClient
from order_relay.shop.store import ShopStatusStore, StoreUnavailableError


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """LINE order relay CLI."""
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = RelaySettings.from_env()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind.")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to PORT).")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int | None) -> None:
    """Run the webhook and notification server."""
    import uvicorn

    from order_relay.server.app import configure_logging, create_app

    settings: RelaySettings = ctx.obj["settings"]
    configure_logging(settings)
    uvicorn.run(create_app(settings), host=host, port=port or settings.port)


@cli.command("shop-status")
@click.pass_context
def shop_status(ctx: click.Context) -> None:
    """Print whether the shop is currently open."""
    settings: RelaySettings = ctx.obj["settings"]
    store = ShopStatusStore(
        base_url=settings.supabase_url,
        api_key=settings.supabase_key,
        table=settings.shop_table,
        shop_id=settings.shop_id,
    )
    try:
        status = asyncio.run(store.fetch_status())
    except StoreUnavailableError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json.dumps(status.model_dump()))


@cli.command()
@click.argument("user_id")
@click.argument("text")
@click.pass_context
def push(ctx: click.Context, user_id: str, text: str) -> None:
    """Push TEXT to the LINE user USER_ID."""
    settings: RelaySettings = ctx.obj["settings"]
    messaging = LineMessagingClient(
        channel_access_token=settings.channel_access_token,
        channel_secret=settings.channel_secret,
    )
    try:
        asyncio.run(messaging.push(user_id, text))
    except DeliveryError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Message sent to {user_id}")
