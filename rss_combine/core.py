from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import logging
from typing import Iterable, List, Set, Tuple, Union

from .dedup import collect_new, register_guids
from .exceptions import FeedParseError, FeedReadError, RSSCombineError
from .models import FeedDocument, FeedEntry
from .parser import read_feed

logger = logging.getLogger(__name__)

FeedSource = Union[str, Path]


@dataclass
class MergeOptions:
    max_entries: int = 0  # 0 means unlimited
    verbose: bool = False


@dataclass
class MergeResult:
    document: FeedDocument
    new_entries: int = 0
    missing_guids: int = 0
    truncated: bool = False
    skipped: List[Tuple[FeedSource, RSSCombineError]] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.new_entries > 0

    @property
    def entry_count(self) -> int:
        return len(self.document.channel.findall("item"))


class FeedMerger:
    """
    Merge the items of additional RSS files into a primary feed.

    Pipeline: read each source → drop items already known by GUID → new items
    first, primary items last → truncate to max_entries.

    The channel metadata of the result is taken from the last source that was
    read successfully, falling back to the primary feed.
    """

    def __init__(
        self,
        *,
        max_entries: int = 0,
        verbose: bool = False,
    ) -> None:
        if max_entries < 0:
            raise ValueError("max_entries must be zero or positive")
        self.options = MergeOptions(max_entries=max_entries, verbose=verbose)

    def _say(self, message: str) -> None:
        if self.options.verbose:
            print(message)

    def merge(self, primary: FeedDocument, sources: Iterable[FeedSource]) -> MergeResult:
        known_guids: Set[str] = set()

        primary_entries = primary.entries
        missing = register_guids(primary_entries, known_guids)

        extra: List[FeedEntry] = []
        result = MergeResult(document=primary)
        namespaces = dict(primary.namespaces)

        for source in sources:
            self._say(f"Reading additional RSS: {source}")
            try:
                doc = read_feed(source)
            except FeedReadError as e:
                logger.warning("Skipping unreadable RSS file %s: %s", source, e)
                result.skipped.append((source, e))
                continue
            except FeedParseError as e:
                logger.warning("Skipping unparseable RSS file %s: %s", source, e)
                result.skipped.append((source, e))
                continue

            # Newest successfully read file provides the channel fields
            result.document = doc
            for prefix, uri in doc.namespaces.items():
                namespaces.setdefault(prefix, uri)

            new, no_guid = collect_new(doc.entries, known_guids)
            extra.extend(new)
            missing += no_guid

        result.missing_guids = missing
        if missing > 0:
            logger.warning("Ignored %d RSS entries without a GUID", missing)

        # Only rewrite the feed when something was added
        if not extra:
            self._say("No changes made")
            return MergeResult(
                document=primary,
                missing_guids=missing,
                skipped=result.skipped,
            )

        final = extra + primary_entries
        limit = self.options.max_entries
        if limit > 0 and len(final) > limit:
            self._say(f"Restricting RSS size to newest {limit} entries")
            final = final[:limit]
            result.truncated = True

        result.document.namespaces = namespaces
        result.document.replace_entries(final)
        result.new_entries = len(extra)
        return result
