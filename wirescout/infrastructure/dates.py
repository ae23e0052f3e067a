"""Normalization of the date texts found on listing pages."""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Callable, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_COLLAPSE_WHITESPACE_RE = re.compile(r"\s+", re.UNICODE)

# Day first, always. Generic parsers read 01/02/2024 as January 2nd.
_DAY_MONTH_YEAR_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")

_RELATIVE_RE = re.compile(
    r"^(?P<amount>\d+|an?|one)\s+"
    r"(?P<unit>second|sec|minute|min|hour|hr|day|week|month|year)s?\s+ago$",
    re.IGNORECASE,
)
_RELATIVE_UNITS = {
    "second": "seconds",
    "sec": "seconds",
    "minute": "minutes",
    "min": "minutes",
    "hour": "hours",
    "hr": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}
_RELATIVE_KEYWORDS = {
    "now": relativedelta(),
    "just now": relativedelta(),
    "today": relativedelta(),
    "yesterday": relativedelta(days=1),
}

_DATETIME_DELIMITERS = ("|", "•", "·", " / ", " — ", " – ")
_DATE_PREFIX_RE = re.compile(
    r"^(?:published|posted|updated|last updated|date)(?:\s+on)?\s*:?\s*",
    re.IGNORECASE,
)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DateNormalizer:
    """Converts heterogeneous date texts into UTC datetimes.

    The strict ``DD/MM/YYYY`` rule runs before anything else; remaining texts go
    through relative expressions ("3 days ago", "yesterday") and finally
    ``dateutil``. Naive results are read as UTC.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock

    def normalize(self, text: str | None) -> Optional[str]:
        """Return the ISO-8601 form of ``text`` or ``None`` when unparsable."""

        parsed = self.parse(text)
        return parsed.isoformat() if parsed is not None else None

    def parse(self, text: str | None) -> Optional[datetime]:
        if not text or not text.strip():
            return None
        value = self._clean(text)

        day_first = self._try_day_month_year(value)
        if day_first is not None:
            return day_first

        relative = self._try_relative(value)
        if relative is not None:
            return relative

        for candidate in self._candidates(value):
            # Prefix or delimiter stripping can leave a bare DD/MM/YYYY.
            parsed = self._try_day_month_year(candidate) or self._try_dateutil(candidate)
            if parsed is not None:
                return parsed
        return None

    def _clean(self, value: str) -> str:
        sanitized = value.replace("\xa0", " ").replace("\u202f", " ")
        return _COLLAPSE_WHITESPACE_RE.sub(" ", sanitized).strip()

    def _try_day_month_year(self, value: str) -> Optional[datetime]:
        match = _DAY_MONTH_YEAR_RE.match(value)
        if not match:
            return None
        day, month, year = map(int, match.groups())
        try:
            return datetime(year, month, day, tzinfo=timezone.utc)
        except ValueError:
            return None

    def _try_relative(self, value: str) -> Optional[datetime]:
        lowered = value.lower()
        if lowered in _RELATIVE_KEYWORDS:
            return self._now() - _RELATIVE_KEYWORDS[lowered]
        match = _RELATIVE_RE.match(lowered)
        if not match:
            return None
        amount_text = match.group("amount")
        amount = int(amount_text) if amount_text.isdigit() else 1
        unit = _RELATIVE_UNITS[match.group("unit")]
        return self._now() - relativedelta(**{unit: amount})

    def _candidates(self, value: str) -> list[str]:
        candidates = [value]
        stripped = _DATE_PREFIX_RE.sub("", value)
        if stripped and stripped not in candidates:
            candidates.append(stripped)
        for delimiter in _DATETIME_DELIMITERS:
            if delimiter in stripped:
                head = stripped.split(delimiter, 1)[0].strip()
                if head and head not in candidates:
                    candidates.append(head)
        return candidates

    def _try_dateutil(self, value: str) -> Optional[datetime]:
        default = self._now().replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
        try:
            return _to_utc(date_parser.parse(value, default=default))
        except (ValueError, OverflowError):
            return None

    def _now(self) -> datetime:
        return _to_utc(self._clock())


_default_normalizer = DateNormalizer()


def normalize(text: str | None) -> Optional[str]:
    """Module-level shortcut for :meth:`DateNormalizer.normalize`."""

    return _default_normalizer.normalize(text)


__all__ = ["DateNormalizer", "normalize"]
