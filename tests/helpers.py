from __future__ import annotations

from typing import Iterable, List, Optional, Union

from rss_combine.models import FeedDocument


Item = Union[str, None, tuple]


def render_feed(items: Iterable[Item], *, title: str = "Example feed", extra_ns: bool = False) -> str:
    """
    Build a small RSS 2.0 document.

    Each item is a GUID string, None for an item without <guid>, or a
    (guid, title) tuple.
    """
    parts = []
    for n, it in enumerate(items):
        guid, item_title = it if isinstance(it, tuple) else (it, f"item {it or n}")
        guid_xml = f"<guid>{guid}</guid>" if guid is not None else ""
        body = f"<content:encoded>&lt;p&gt;{item_title}&lt;/p&gt;</content:encoded>" if extra_ns else ""
        parts.append(f"<item><title>{item_title}</title>{guid_xml}{body}</item>")
    ns = ' xmlns:content="http://purl.org/rss/1.0/modules/content/"' if extra_ns else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<rss version="2.0"{ns}><channel>'
        f"<title>{title}</title><link>https://example.org/</link>"
        f"<description>{title} description</description>"
        + "".join(parts)
        + "</channel></rss>\n"
    )


def guids(doc: FeedDocument) -> List[Optional[str]]:
    return [e.guid for e in doc.entries]


def titles(doc: FeedDocument) -> List[str]:
    return [e.element.findtext("title") for e in doc.entries]


def channel_title(doc: FeedDocument) -> Optional[str]:
    return doc.channel.findtext("title")


def render_euc_kr_feed(items: Iterable[Item], *, title: str = "한국 뉴스") -> bytes:
    text = render_feed(items, title=title)
    return text.replace('encoding="UTF-8"', 'encoding="EUC-KR"').encode("euc-kr")


BROKEN_EUC_KR_FEED = (
    b'<?xml version="1.0" encoding="EUC-KR"?>\n'
    b'<rss version="2.0"><channel><title>\xff\xfe</title></channel></rss>\n'
)

RDF_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns="http://purl.org/rss/1.0/"
         xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel rdf:about="https://example.org/">
    <title>RDF feed</title>
    <link>https://example.org/</link>
    <description>An RSS 1.0 feed</description>
    <items>
      <rdf:Seq>
        <rdf:li rdf:resource="https://example.org/1"/>
        <rdf:li rdf:resource="https://example.org/2"/>
      </rdf:Seq>
    </items>
  </channel>
  <item rdf:about="https://example.org/1">
    <title>First</title>
    <link>https://example.org/1</link>
    <dc:creator>Kim</dc:creator>
  </item>
  <item rdf:about="https://example.org/2">
    <title>Second</title>
    <link>https://example.org/2</link>
  </item>
</rdf:RDF>
"""
