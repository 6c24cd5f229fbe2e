"""Timestamp conversion utilities."""

from datetime import UTC, datetime, tzinfo
from typing import Optional

from dateutil import tz


def resolve_timezone(name: str) -> tzinfo:
    """Return the tzinfo for an IANA zone name or 'UTC'.

    Raises:
        ValueError: If the zone is unknown
    """
    if name.upper() == "UTC":
        return UTC
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown timezone '{name}'")
    return zone


def local_to_utc(local: datetime, zone: tzinfo = UTC) -> Optional[datetime]:
    """Interpret a naive datetime as wall-clock time in ``zone`` and convert to UTC.

    Returns None when the wall-clock time does not correspond to exactly one
    instant, i.e. it falls in a DST gap or a repeated hour.
    """
    if local.tzinfo is not None:
        return local.astimezone(UTC)
    if zone is UTC:
        return local.replace(tzinfo=UTC)
    if not tz.datetime_exists(local, zone) or tz.datetime_ambiguous(local, zone):
        return None
    return local.replace(tzinfo=zone).astimezone(UTC)
