"""Configuration of a Wirescout run, read from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

from wirescout.domain import ConfigurationError, Destination, SiteSpec
from wirescout.schemas import load_sites

_DEFAULT_EMAIL_HOST = "smtp.gmail.com"
_DEFAULT_EMAIL_PORT = 587
_DEFAULT_SUBJECT = "New results from Wirescout!"
_DEFAULT_STATE_FILE = "state.json"
_DEFAULT_MAX_WORKERS = 8
_DEFAULT_FETCH_TIMEOUT = 30.0


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable '{name}' must be an integer") from exc


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name)
    if value in (None, ""):
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable '{name}' must be a number") from exc


def state_file_from_env(env: Mapping[str, str] | None = None) -> Path:
    """Return the snapshot path configured by ``WIRESCOUT_STATE_FILE``."""

    env = os.environ if env is None else env
    return Path(env.get("WIRESCOUT_STATE_FILE") or _DEFAULT_STATE_FILE)


def _split_recipients(value: str | None) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class EmailSettings:
    """SMTP connection and addressing used for notifications."""

    host: str = _DEFAULT_EMAIL_HOST
    port: int = _DEFAULT_EMAIL_PORT
    user: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    sender: Optional[str] = None
    recipients: Tuple[str, ...] = ()
    subject: str = _DEFAULT_SUBJECT

    def destination(self) -> Destination:
        return Destination(
            recipients=self.recipients,
            sender=self.sender or self.user or "",
            subject=self.subject,
        )


@dataclass(frozen=True)
class Settings:
    """Immutable configuration built once at startup."""

    sites: Tuple[SiteSpec, ...]
    email: EmailSettings
    state_file: Path = Path(_DEFAULT_STATE_FILE)
    max_workers: int = _DEFAULT_MAX_WORKERS
    fetch_timeout: float = _DEFAULT_FETCH_TIMEOUT

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Read the settings from ``env`` (``os.environ`` by default).

        The site list comes from ``SITES_CONFIG`` or, when it is unset, from
        the JSON file named by ``WIRESCOUT_SITES_FILE``.

        Raises:
            ConfigurationError: When a value cannot be read. Missing values are
                only reported by :meth:`validate`.
        """

        env = os.environ if env is None else env
        email = EmailSettings(
            host=env.get("EMAIL_HOST") or _DEFAULT_EMAIL_HOST,
            port=_get_int(env, "EMAIL_PORT", _DEFAULT_EMAIL_PORT),
            user=env.get("EMAIL_USER") or None,
            password=env.get("EMAIL_PASS") or None,
            sender=env.get("EMAIL_FROM") or None,
            recipients=_split_recipients(env.get("EMAIL_RECIPIENTS")),
            subject=env.get("EMAIL_SUBJECT") or _DEFAULT_SUBJECT,
        )
        return cls(
            sites=tuple(cls._read_sites(env)),
            email=email,
            state_file=state_file_from_env(env),
            max_workers=_get_int(env, "WIRESCOUT_MAX_WORKERS", _DEFAULT_MAX_WORKERS),
            fetch_timeout=_get_float(env, "WIRESCOUT_FETCH_TIMEOUT", _DEFAULT_FETCH_TIMEOUT),
        )

    @staticmethod
    def _read_sites(env: Mapping[str, str]) -> list[SiteSpec]:
        raw = env.get("SITES_CONFIG")
        if raw:
            return load_sites(raw)
        sites_file = env.get("WIRESCOUT_SITES_FILE")
        if sites_file:
            path = Path(sites_file)
            try:
                return load_sites(path.read_text(encoding="utf-8"))
            except OSError as exc:
                raise ConfigurationError(f"Cannot read sites file {path}: {exc}") from exc
        return []

    def validate(self) -> None:
        """Fail before any network activity when a run cannot succeed."""

        if not self.sites:
            raise ConfigurationError(
                "No sites configured: set SITES_CONFIG or WIRESCOUT_SITES_FILE"
            )
        if not self.email.recipients:
            raise ConfigurationError("No email recipients: set EMAIL_RECIPIENTS")
        missing = [
            name
            for name, value in (("EMAIL_USER", self.email.user), ("EMAIL_PASS", self.email.password))
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Email credentials missing: {', '.join(missing)}")


__all__ = ["EmailSettings", "Settings", "state_file_from_env"]
