"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.

The dataclass defaults suit tests and local development (no HTTPS
redirect). ``AppConfig.from_env()`` reads deployment settings from the
environment, where the redirect is on unless explicitly disabled.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

JSON_MEDIA_TYPE = "application/json"

DEFAULT_ALLOW_HEADERS = "Authorization, Accept, Range, Content-Type, Host, Origin"


def _env_flag(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() not in ("false", "0", "no", "off")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, https_redirect=True)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"
    workers: int = 1

    # Wire contract
    content_type: str = JSON_MEDIA_TYPE
    cors_allow_headers: str = DEFAULT_ALLOW_HEADERS
    cors_mirror_origin: bool = True

    # HTTPS redirect
    https_redirect: bool = False
    https_use_forwarded_proto: bool = False
    permit_clear_loopback: bool = False

    # Secure headers (None disables a header)
    hsts_max_age: int = 8_640_000  # 100 days
    hsts_include_subdomains: bool = True
    frame_options: str | None = "DENY"
    content_type_options: str | None = "nosniff"
    xss_protection: str | None = "1; mode=block"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> AppConfig:
        """Build a config from environment variables.

        ``HTTPS`` (or ``WREN_HTTPS`` when ``HTTPS`` is unset) controls the
        HTTPS redirect: enabled unless set to exactly ``"false"``.
        ``WREN_FORWARDED_PROTO`` trusts ``X-Forwarded-Proto``.
        ``WREN_HOST``, ``WREN_PORT``, ``WREN_DEBUG`` and
        ``WREN_LOG_LEVEL`` override the server settings.

        Keyword *overrides* win over the environment.
        """
        env = os.environ if environ is None else environ

        https = env.get("HTTPS") or env.get("WREN_HTTPS")
        values: dict[str, object] = {
            "https_redirect": https != "false",
            "https_use_forwarded_proto": _env_flag(env.get("WREN_FORWARDED_PROTO"), False),
            "debug": _env_flag(env.get("WREN_DEBUG"), False),
        }
        if env.get("WREN_HOST"):
            values["host"] = env["WREN_HOST"]
        if env.get("WREN_PORT"):
            values["port"] = int(env["WREN_PORT"])
        if env.get("WREN_LOG_LEVEL"):
            values["log_level"] = env["WREN_LOG_LEVEL"].lower()
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
