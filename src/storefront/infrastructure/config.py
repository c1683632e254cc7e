"""Runtime settings.

Values come from an optional YAML file (``STOREFRONT_CONFIG`` points at it)
and are then overridden by ``STOREFRONT_<KEY>`` environment variables, so a
deployment can keep secrets out of the file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import PaymentMethod
from storefront.domain.model.product import StockPolicy

logger = logging.getLogger(__name__)

ENV_PREFIX = "STOREFRONT_"
CONFIG_ENV = "STOREFRONT_CONFIG"

# Resolve the default data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass
class Settings:
    database_url: str = f"sqlite:///{_DATA_DIR / 'storefront.db'}"
    database_echo: bool = False

    jwt_secret: str = "change-me-in-production"
    jwt_expiry_hours: int = 24

    stock_policy: str = StockPolicy.CLAMP.value
    payment_methods: list[str] = field(
        default_factory=lambda: [m.value for m in PaymentMethod]
    )

    admin_name: str = "Admin"
    admin_email: str = "admin@example.com"
    admin_password: str = ""
    admin_phone: str = ""
    contact_whatsapp: str = ""

    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    email_from: str = ""

    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_whatsapp_number: str = "whatsapp:+14155238886"

    mercadopago_access_token: str = ""
    payment_success_url: str = ""
    payment_failure_url: str = ""
    payment_pending_url: str = ""

    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    notification_workers: int = 4

    log_level: str = "INFO"
    log_file: str = ""

    # --- Derived values ------------------------------------------------------

    @property
    def stock_policy_enum(self) -> StockPolicy:
        try:
            return StockPolicy(self.stock_policy.lower())
        except ValueError:
            raise ValidationError(
                f"stock_policy must be one of: {', '.join(p.value for p in StockPolicy)}"
            ) from None

    @property
    def accepted_payment_methods(self) -> frozenset[PaymentMethod]:
        try:
            return frozenset(PaymentMethod(m.lower()) for m in self.payment_methods)
        except ValueError:
            raise ValidationError(
                f"payment_methods may only contain: {', '.join(m.value for m in PaymentMethod)}"
            ) from None

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host)

    @property
    def twilio_configured(self) -> bool:
        return bool(self.twilio_account_sid and self.twilio_auth_token)

    @property
    def sender_address(self) -> str:
        return self.email_from or self.smtp_user or self.admin_email


def load_config(path: str | Path) -> dict[str, Any]:
    """Read the YAML settings file; a missing file means no overrides."""
    path = Path(path)
    if not path.exists():
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValidationError(f"Config file {path} must contain a mapping")
    return data


def load_settings(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    environ = os.environ if environ is None else environ
    config_path = config_path or environ.get(CONFIG_ENV)

    values: dict[str, Any] = {}
    if config_path:
        values.update(load_config(config_path))

    known = {f.name: f for f in fields(Settings)}
    unknown = set(values) - set(known)
    if unknown:
        raise ValidationError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    for name in known:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None:
            values[name] = raw

    defaults = Settings()
    coerced = {
        name: _coerce(name, value, getattr(defaults, name))
        for name, value in values.items()
    }
    settings = Settings(**coerced)
    # Fail at startup rather than at the first order.
    settings.stock_policy_enum
    settings.accepted_payment_methods
    return settings


def _coerce(name: str, value: Any, default: Any) -> Any:
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Config value {name} must be an integer") from None
    if isinstance(default, list):
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return list(value)
    return "" if value is None else str(value)
