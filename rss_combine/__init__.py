"""
rss_combine

Merge the entries of several RSS files into one feed, deduplicated by GUID.

Core ideas:
- Input: one main RSS file and one or more additional RSS files
- Process: read → drop items with a known GUID → new items first, original items last → truncate
- Output: the merged feed, atomically written back (in place by default)

Example
-------
from rss_combine import FeedMerger, read_feed, write_feed

primary = read_feed("feed.xml")
result = FeedMerger(max_entries=50).merge(primary, ["feed-new.xml", "feed-mirror.xml"])
if result.changed:
    write_feed(result.document, "feed.xml")
"""
from .models import FeedDocument, FeedEntry
from .core import FeedMerger, MergeResult
from .parser import read_feed
from .writer import write_feed

__all__ = [
    "FeedDocument",
    "FeedEntry",
    "FeedMerger",
    "MergeResult",
    "read_feed",
    "write_feed",
]
