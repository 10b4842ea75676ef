"""Application configuration loaded from the environment and ``.env`` files."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Multipliers in microseconds for each duration unit.
_UNIT_MICROSECONDS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class ConfigError(ValueError):
    """Raised when the configuration cannot be read from the environment."""


@dataclass
class Config:
    """Settings for the web application."""

    database_url: str
    session_key: str
    debug: bool = False
    port: str = "8080"
    allowed_hosts: list[str] = field(default_factory=list)
    session_lifetime: timedelta = timedelta(hours=12)
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_pass: str = ""
    smtp_from: str = "noreply@localhost"


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``12h``, ``1h30m`` or ``1.5s``."""
    original = text
    sign = 1
    if text[:1] in ("+", "-"):
        if text[0] == "-":
            sign = -1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ConfigError(f"invalid duration {original!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _COMPONENT.match(text, pos)
        if match is None:
            raise ConfigError(f"invalid duration {original!r}")
        number, unit = match.groups()
        try:
            total += Decimal(number) * _UNIT_MICROSECONDS[unit]
        except InvalidOperation as exc:
            raise ConfigError(f"invalid duration {original!r}") from exc
        pos = match.end()
    return timedelta(microseconds=sign * int(total))


def _parse_bool(name: str, value: str) -> bool:
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"parse error on field {name!r}: invalid boolean {value!r}")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value, 10)
    except ValueError as exc:
        raise ConfigError(f"parse error on field {name!r}: invalid integer {value!r}") from exc


def _load_dotenv_files() -> None:
    """Load ``.env``, falling back to ``.env.example``; silently skip if absent."""
    for candidate in (Path(".env"), Path(".env.example")):
        if candidate.is_file():
            load_dotenv(candidate)
            return


def load(environ: Mapping[str, str] | None = None) -> Config:
    """Build a :class:`Config` from ``environ`` (or the process environment).

    When no mapping is given, ``.env`` (or ``.env.example``) is loaded into the
    process environment first.
    """
    if environ is None:
        _load_dotenv_files()
        environ = os.environ

    missing = [name for name in ("DATABASE_URL", "SESSION_KEY") if name not in environ]
    if missing:
        raise ConfigError(
            "; ".join(f'required environment variable "{name}" is not set' for name in missing)
        )

    def get(name: str, default: str = "") -> str:
        value = environ.get(name, "")
        return value if value != "" else default

    hosts = get("ALLOWED_HOSTS")
    cfg = Config(
        database_url=environ["DATABASE_URL"],
        session_key=environ["SESSION_KEY"],
        debug=_parse_bool("DEBUG", get("DEBUG", "false")),
        port=get("PORT", "8080"),
        allowed_hosts=hosts.split(",") if hosts else [],
        session_lifetime=parse_duration(get("SESSION_LIFETIME", "12h")),
        smtp_host=get("SMTP_HOST"),
        smtp_port=_parse_int("SMTP_PORT", get("SMTP_PORT", "587")),
        smtp_user=get("SMTP_USER"),
        smtp_pass=get("SMTP_PASS"),
        smtp_from=get("SMTP_FROM", "noreply@localhost"),
    )

    if cfg.debug:
        logger.warning("Running in DEBUG mode")
    return cfg


def must_load(environ: Mapping[str, str] | None = None) -> Config:
    """Like :func:`load`, but log the failure and exit the program on error."""
    try:
        return load(environ)
    except ConfigError as exc:
        logger.error("Failed to load config: %s", exc)
        raise SystemExit(f"Failed to load config: {exc}") from exc