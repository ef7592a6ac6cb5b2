"""Process configuration for the order relay.

Values are read from the environment exactly once, at startup, and frozen
into a ``RelaySettings`` instance that is passed to every component.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

DEFAULT_ORDER_BASE_URL = "https://customer-app-restuarant-application.onrender.com/"
DEFAULT_CORS_ORIGIN = "https://customer-app-restuarant-application.onrender.com"

_REQUIRED = {
    "LINE_CHANNEL_ACCESS_TOKEN": "channel_access_token",
    "LINE_CHANNEL_SECRET": "channel_secret",
    "SUPABASE_URL": "supabase_url",
    "SUPABASE_ANON_KEY": "supabase_key",
}


class ConfigurationError(Exception):
    """Raised when a required identity or credential is absent."""


class RelaySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel_access_token: str
    channel_secret: str
    supabase_url: str
    supabase_key: str
    admin_user_id: str | None = None
    port: int = 3001
    cors_origins: tuple[str, ...] = (DEFAULT_CORS_ORIGIN,)
    order_base_url: str = DEFAULT_ORDER_BASE_URL
    order_trigger: str = "สั่งอาหาร"
    status_trigger: str = "เช็คสถานะร้าน"
    shop_table: str = "shop_settings"
    shop_id: int = 1
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RelaySettings:
        """Build settings from environment variables.

        Raises ConfigurationError naming every missing required variable.
        """
        env = os.environ if environ is None else environ

        missing = [name for name in _REQUIRED if not env.get(name, "").strip()]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        values: dict[str, object] = {
            field: env[name].strip() for name, field in _REQUIRED.items()
        }
        values["admin_user_id"] = env.get("ADMIN_LINE_USER_ID", "").strip() or None
        values["port"] = _int_env(env, "PORT", 3001)
        values["shop_id"] = _int_env(env, "SHOP_ID", 1)

        origins = [o.strip() for o in env.get("CORS_ORIGINS", "").split(",") if o.strip()]
        if origins:
            values["cors_origins"] = tuple(origins)

        optional = {
            "ORDER_BASE_URL": "order_base_url",
            "ORDER_TRIGGER": "order_trigger",
            "STATUS_TRIGGER": "status_trigger",
            "SHOP_SETTINGS_TABLE": "shop_table",
            "LOG_LEVEL": "log_level",
        }
        for name, field in optional.items():
            raw = env.get(name, "").strip()
            if raw:
                values[field] = raw

        return cls(**values)  # type: ignore[arg-type]


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
