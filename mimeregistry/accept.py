"""Parsing of HTTP ``Accept`` header values."""

import math
from typing import List
from typing import NamedTuple
from typing import Optional
from typing import Tuple

WILDCARD = "*"
ANY_MEDIA_RANGE = "*/*"


class AcceptEntry(NamedTuple):
    media_range: str
    quality: Optional[float]


def _split(media_range: str) -> Tuple[str, str]:
    main, _, sub = media_range.partition("/")
    return main.strip().lower(), sub.strip().lower()


def _parse_quality(raw: str) -> Optional[float]:
    try:
        q = float(raw.strip())
    except ValueError:
        return None
    if math.isnan(q):
        return None
    return min(max(q, 0.0), 1.0)


def parse_accept_header(value: Optional[str]) -> List[AcceptEntry]:
    """
    Split an Accept header into entries, in header order.

    An empty or missing header means ``*/*``. A bare ``*`` is read as
    ``*/*``. Entries without a ``type/subtype`` shape are dropped, and a
    ``q`` parameter that is not a number counts as absent.
    """
    if value is None or not value.strip():
        return [AcceptEntry(ANY_MEDIA_RANGE, None)]

    entries: List[AcceptEntry] = []
    for part in value.split(","):
        params = part.split(";")
        media_range = params[0].strip().lower()
        if media_range == WILDCARD:
            media_range = ANY_MEDIA_RANGE
        main, sub = _split(media_range)
        if not main or not sub:
            continue
        quality: Optional[float] = None
        for param in params[1:]:
            name, _, raw = param.partition("=")
            if name.strip().lower() == "q":
                quality = _parse_quality(raw)
        entries.append(AcceptEntry(f"{main}/{sub}", quality))
    return entries


def media_range_matches(requested: str, registered: str) -> bool:
    """
    True when two media ranges overlap, segment by segment.
    Either side may carry ``*`` in its type or subtype.
    """
    req_main, req_sub = _split(requested)
    reg_main, reg_sub = _split(registered)
    if WILDCARD not in (req_main, reg_main) and req_main != reg_main:
        return False
    return WILDCARD in (req_sub, reg_sub) or req_sub == reg_sub
