"""
Append-only store of URL records waiting to be rendered into sitemaps.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .errors import ValidationError

MAX_URL_LENGTH = 2048

RECORD_KEYS = ("loc", "lastmod", "changefreq", "priority", "alternates")


@dataclass(frozen=True)
class URLRecord:
    location: str
    last_modified: str | None = None
    change_frequency: str | None = None
    priority: float | None = None
    alternates: tuple[dict[str, str], ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"loc": self.location}
        if self.last_modified is not None:
            out["lastmod"] = self.last_modified
        if self.change_frequency is not None:
            out["changefreq"] = self.change_frequency
        if self.priority is not None:
            out["priority"] = self.priority
        return out


def format_lastmod(value: datetime | date | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def make_record(
    location: Any,
    last_modified: datetime | date | str | None = None,
    change_frequency: str | None = None,
    priority: float | str | None = None,
    alternates: Iterable[Mapping[str, str]] | None = None,
) -> URLRecord:
    if not isinstance(location, str) or not location:
        raise ValidationError("URL is mandatory. At least one argument should be given.")
    if len(location) > MAX_URL_LENGTH:
        raise ValidationError(f"URL length can't be bigger than {MAX_URL_LENGTH} characters (got {len(location)}).")
    if change_frequency is not None and not isinstance(change_frequency, str):
        raise ValidationError(f"changefreq must be a string, got {change_frequency!r}")

    priority_value: float | None = None
    if priority is not None:
        try:
            priority_value = float(priority)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"priority must be a number, got {priority!r}") from exc

    alternate_items: tuple[dict[str, str], ...] | None = None
    if alternates is not None:
        items: list[dict[str, str]] = []
        for i, item in enumerate(alternates):
            if not isinstance(item, Mapping):
                raise ValidationError(f"alternate {i} must be a mapping")
            for key in ("hreflang", "href"):
                value = item.get(key)
                if value is not None and not isinstance(value, str):
                    raise ValidationError(f"alternate {i}: {key} must be a string, got {value!r}")
            items.append(dict(item))
        alternate_items = tuple(items)

    return URLRecord(
        location=location,
        last_modified=format_lastmod(last_modified),
        change_frequency=change_frequency,
        priority=priority_value,
        alternates=alternate_items,
    )


def record_fields(item: Any) -> tuple[Any, ...]:
    if isinstance(item, URLRecord):
        return (item.location, item.last_modified, item.change_frequency, item.priority, item.alternates)
    if isinstance(item, Mapping):
        return tuple(item.get(key) for key in RECORD_KEYS)
    if isinstance(item, str):
        return (item,)
    if isinstance(item, Sequence):
        if not 1 <= len(item) <= len(RECORD_KEYS):
            raise ValidationError(f"URL entry must have 1 to {len(RECORD_KEYS)} fields, got {len(item)}")
        return tuple(item)
    raise ValidationError(f"Unsupported URL entry type: {type(item).__name__}")


class URLRecordStore:
    """Ordered URL records. Not safe for concurrent mutation."""

    def __init__(self) -> None:
        self._records: list[URLRecord] = []

    def add(
        self,
        location: str,
        last_modified: datetime | date | str | None = None,
        change_frequency: str | None = None,
        priority: float | None = None,
        alternates: Iterable[Mapping[str, str]] | None = None,
    ) -> URLRecord:
        record = make_record(location, last_modified, change_frequency, priority, alternates)
        self._records.append(record)
        return record

    def add_many(self, items: Iterable[Any]) -> int:
        """Validate every entry first, then append all of them.

        A single ValidationError lists every failing position; on failure the
        store is left unchanged.
        """
        pending: list[URLRecord] = []
        errors: list[str] = []
        for position, item in enumerate(items):
            try:
                pending.append(make_record(*record_fields(item)))
            except ValidationError as exc:
                errors.append(f"entry {position}: {exc}")
        if errors:
            raise ValidationError(f"{len(errors)} invalid URL entries; first: {errors[0]}", errors)
        self._records.extend(pending)
        return len(pending)

    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def to_list(self) -> list[URLRecord]:
        return list(self._records)

    def to_dicts(self) -> list[dict[str, Any]]:
        return [record.to_dict() for record in self._records]
