from __future__ import annotations

import io
import re
from pathlib import Path
from typing import Dict, Optional, Tuple, Union
import xml.etree.ElementTree as ET

from .exceptions import FeedParseError, FeedReadError
from .models import FeedDocument

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RSS1_NS = "http://purl.org/rss/1.0/"
RSS090_NS = "http://my.netscape.com/rdf/simple/0.9/"

# Channel children of RSS 0.90/1.0 that only point at other rdf nodes
_RSS1_REFERENCES = {"items", "image", "textinput"}

_DECLARED_ENCODING = re.compile(
    rb"""^(\xef\xbb\xbf)?\s*<\?xml[^>]*?encoding\s*=\s*["']([A-Za-z0-9._-]+)["']"""
)


def _iterparse(data: bytes) -> Tuple[Optional[ET.Element], Dict[str, str]]:
    namespaces: Dict[str, str] = {}
    root = None
    for event, node in ET.iterparse(io.BytesIO(data), events=("start", "start-ns")):
        if event == "start-ns":
            prefix, uri = node
            namespaces.setdefault(prefix, uri)
        elif root is None:
            root = node
    return root, namespaces


def _to_utf8(data: bytes) -> bytes:
    """
    Re-encode a document in a multi-byte encoding (EUC-KR, Shift_JIS, ...)
    as UTF-8, since expat only handles single-byte encodings itself.
    """
    m = _DECLARED_ENCODING.match(data)
    if not m:
        raise ValueError("no encoding declaration")
    encoding = m.group(2).decode("ascii")
    text = data[m.end(1) if m.group(1) else 0:].decode(encoding)
    text = re.sub(
        r"""(<\?xml[^>]*?encoding\s*=\s*)["'][A-Za-z0-9._-]+["']""",
        r'\1"UTF-8"',
        text,
        count=1,
    )
    return text.encode("utf-8")


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _from_rdf(root: ET.Element, channel: ET.Element, ns: str) -> Tuple[ET.Element, ET.Element]:
    """
    Rebuild an RSS 0.90/1.0 (rdf:RDF) document as RSS 2.0.

    Elements in the `ns` namespace lose it, extension elements (dc:, content:)
    are kept as they are. Items without a <guid> get one from rdf:about.
    """
    def _convert(src: ET.Element, tag: str) -> ET.Element:
        out = ET.Element(tag)
        out.text = src.text
        for child in src:
            if child.tag.startswith("{" + ns + "}"):
                node = ET.SubElement(out, _local(child.tag), {
                    k: v for k, v in child.attrib.items() if not k.startswith("{" + RDF_NS + "}")
                })
                node.text = child.text
                node.extend(list(child))
            else:
                out.append(child)
        return out

    rss = ET.Element("rss", {"version": "2.0"})
    new_channel = _convert(channel, "channel")
    for child in list(new_channel):
        if child.tag in _RSS1_REFERENCES:
            new_channel.remove(child)
    rss.append(new_channel)

    for item in root.findall(f"{{{ns}}}item"):
        new_item = _convert(item, "item")
        about = item.get(f"{{{RDF_NS}}}about")
        if new_item.find("guid") is None and about:
            ET.SubElement(new_item, "guid", {"isPermaLink": "false"}).text = about
        new_channel.append(new_item)
    return rss, new_channel


def read_feed(path: Union[str, Path]) -> FeedDocument:
    """
    Read an RSS file into a FeedDocument.

    RSS 2.0 documents are kept as parsed; RSS 0.90/1.0 (rdf:RDF) documents are
    converted to RSS 2.0. Documents in a multi-byte encoding are re-encoded as
    UTF-8 before parsing.

    Raises FeedReadError when the file cannot be opened or read, and
    FeedParseError when the content is not a usable RSS document.
    The file handle is released before returning.
    """
    path = Path(path)
    try:
        with path.open("rb") as fh:
            data = fh.read()
    except OSError as e:
        raise FeedReadError(f"{path}: {e.strerror or e}", path) from e

    try:
        try:
            root, namespaces = _iterparse(data)
        except ValueError:
            # pyexpat: "multi-byte encodings are not supported"
            root, namespaces = _iterparse(_to_utf8(data))
    except ET.ParseError as e:
        raise FeedParseError(f"{path}: {e}", path) from e
    except (ValueError, LookupError) as e:
        raise FeedParseError(f"{path}: cannot decode document ({e})", path) from e

    if root is not None and root.tag == f"{{{RDF_NS}}}RDF":
        for ns in (RSS1_NS, RSS090_NS):
            channel = root.find(f"{{{ns}}}channel")
            if channel is not None:
                break
        else:
            raise FeedParseError(f"{path}: <rdf:RDF> element has no <channel>", path)
        root, channel = _from_rdf(root, channel, ns)
        return FeedDocument(root=root, channel=channel, path=path, namespaces=namespaces)

    if root is None or root.tag != "rss":
        tag = root.tag if root is not None else None
        raise FeedParseError(f"{path}: expected <rss> root element, found <{tag}>", path)

    channel = root.find("channel")
    if channel is None:
        raise FeedParseError(f"{path}: <rss> element has no <channel>", path)

    return FeedDocument(root=root, channel=channel, path=path, namespaces=namespaces)
