from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import xml.etree.ElementTree as ET


@dataclass(frozen=True)
class FeedEntry:
    """
    One <item> of a feed.

    The element is kept as parsed so that every child (including extension
    elements) is written back unchanged. `guid` is None when the item has no
    usable <guid>.
    """
    element: ET.Element
    guid: Optional[str] = None

    @classmethod
    def from_element(cls, element: ET.Element) -> "FeedEntry":
        node = element.find("guid")
        guid = None
        if node is not None and node.text and node.text.strip():
            guid = node.text.strip()
        return cls(element=element, guid=guid)


@dataclass
class FeedDocument:
    """
    A parsed RSS document: channel metadata plus an ordered list of items.

    WARNING: `root` and `channel` are live ElementTree nodes; `replace_entries`
    mutates the channel in place.
    """
    root: ET.Element
    channel: ET.Element
    path: Optional[Path] = None
    namespaces: Dict[str, str] = field(default_factory=dict)

    @property
    def entries(self) -> List[FeedEntry]:
        return [FeedEntry.from_element(el) for el in self.channel.findall("item")]

    def replace_entries(self, entries: Iterable[FeedEntry]) -> None:
        """Drop every <item> of the channel and append `entries` in order."""
        for el in self.channel.findall("item"):
            self.channel.remove(el)
        for entry in entries:
            self.channel.append(entry.element)
