# /tms/services/dashboard_helpers/activity_feed.py

"""
Merging of independently ordered recent-event lists into one feed.

Each source is queried with its own share of the limit, newest first. The
shares are then concatenated, sorted newest first and cut to `limit`.

With the default per-source share of ceil(limit / k), a source that has
fewer events than its share leaves its slack unused: the merged feed can hold
fewer than `limit` items even when the sources together have enough. Pass
`overfetch=True` to give every source the full limit instead.
"""

import math
from typing import Iterable, List

from ...models.dashboard_model import ActivityItem


def per_source_limit(limit: int, source_count: int, overfetch: bool = False) -> int:
    """How many rows each of `source_count` sources may contribute."""
    if limit <= 0 or source_count <= 0:
        return 0
    if overfetch:
        return limit
    return math.ceil(limit / source_count)


def merge_activity_feed(sources: Iterable[List[ActivityItem]], limit: int) -> List[ActivityItem]:
    combined = [item for source in sources for item in source]
    combined.sort(key=lambda item: item.tidspunkt, reverse=True)
    return combined[:max(limit, 0)]
