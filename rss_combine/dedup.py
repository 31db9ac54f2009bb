from __future__ import annotations

from typing import Iterable, List, Set, Tuple

from .models import FeedEntry


def register_guids(entries: Iterable[FeedEntry], seen: Set[str]) -> int:
    """
    Add the GUID of every entry to `seen`.

    Entries without a GUID are kept by the caller but cannot be deduplicated;
    their number is returned.
    """
    missing = 0
    for it in entries:
        if it.guid is None:
            missing += 1
            continue
        seen.add(it.guid)
    return missing


def collect_new(entries: Iterable[FeedEntry], seen: Set[str]) -> Tuple[List[FeedEntry], int]:
    """
    Return the entries whose GUID is not in `seen`, in order, and the number
    of entries that had no GUID. Entries without a GUID are dropped.

    `seen` is updated as entries are accepted, so a GUID repeated within
    `entries` is only taken once.
    """
    out: List[FeedEntry] = []
    missing = 0
    for it in entries:
        if it.guid is None:
            missing += 1
            continue
        if it.guid in seen:
            continue
        seen.add(it.guid)
        out.append(it)
    return out, missing
