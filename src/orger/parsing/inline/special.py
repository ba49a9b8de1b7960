"""Timestamp pass.

A bracketed date that does not form a valid calendar date or time is left
as text.
"""

from __future__ import annotations

import datetime
import re

from orger.location import SourceLocation
from orger.nodes import Timestamp
from orger.utils.logger import get_logger

logger = get_logger(__name__)

_CLOSERS = {"<": ">", "[": "]"}


def _parse_time(value: str | None) -> datetime.time | None:
    if value is None:
        return None
    hour, minute = value.split(":")
    return datetime.time(int(hour), int(minute))


def build_timestamp(match: re.Match[str], location: SourceLocation | None) -> Timestamp | None:
    """Timestamp from ``<2024-01-15 Mon 10:00>`` / ``[2024-01-15]``.

    Angle brackets make an active timestamp, square brackets an inactive one.
    """
    if _CLOSERS[match.group("open")] != match.group("close"):
        return None
    try:
        date = datetime.date.fromisoformat(match.group("date"))
        time = _parse_time(match.group("time"))
        end_time = _parse_time(match.group("end_time"))
    except ValueError:
        logger.debug("Invalid timestamp %r kept as text", match.group(0))
        return None

    return Timestamp(
        location=location,
        raw=match.group(0),
        timestamp_type="active" if match.group("open") == "<" else "inactive",
        date=date,
        time=time,
        end_time=end_time,
        repeater=match.group("repeater"),
        warning=match.group("warning"),
    )
