"""FastAPI application for the LINE order relay."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from order_relay.bot import CommandRouter, ShopStatusResponder
from order_relay.config import RelaySettings
from order_relay.line.client import LineMessagingClient
from order_relay.server.notify_routes import create_notify_router
from order_relay.shop.store import ShopStatusStore

logger = logging.getLogger(__name__)

_MAX_WEBHOOK_BODY_SIZE = 1024 * 1024  # 1MB
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: RelaySettings) -> None:
    logging.basicConfig(level=settings.log_level.upper(), format=_LOG_FORMAT)


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    settings = RelaySettings.from_env()
    configure_logging(settings)
    return create_app(settings)


def create_app(
    settings: RelaySettings,
    store: ShopStatusStore | None = None,
    messaging: LineMessagingClient | None = None,
) -> FastAPI:
    """Create the relay app with the webhook and notification endpoints."""
    app = FastAPI(docs_url=None, redoc_url=None)
    app.state.settings = settings

    if store is None:
        store = ShopStatusStore(
            base_url=settings.supabase_url,
            api_key=settings.supabase_key,
            table=settings.shop_table,
            shop_id=settings.shop_id,
        )
    if messaging is None:
        messaging = LineMessagingClient(
            channel_access_token=settings.channel_access_token,
            channel_secret=settings.channel_secret,
        )

    responder = ShopStatusResponder(
        store=store,
        order_base_url=settings.order_base_url,
        order_trigger=settings.order_trigger,
    )
    router = CommandRouter(
        messaging=messaging,
        responder=responder,
        order_trigger=settings.order_trigger,
        status_trigger=settings.status_trigger,
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        return {
            "status": "ok",
            "message": "LINE order relay is running",
            "endpoints": ["POST /webhook", "POST /api/notify-order-status"],
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/webhook")
    async def line_webhook(request: Request) -> Response:
        body = await request.body()
        if len(body) > _MAX_WEBHOOK_BODY_SIZE:
            return JSONResponse({"error": "Request body too large"}, status_code=413)

        if not messaging.verify_signature(dict(request.headers), body):
            return JSONResponse({"error": "Invalid webhook signature"}, status_code=401)

        events = messaging.extract_events(body)
        logger.info("Received %d webhook event(s)", len(events))

        # LINE flags endpoints that answer non-200, so failures stop here.
        try:
            await router.dispatch(events)
        except Exception:
            logger.exception("Webhook processing failed")
        return Response(status_code=200)

    app.include_router(create_notify_router(messaging, settings.admin_user_id))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
