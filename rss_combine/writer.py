from __future__ import annotations

import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Union
import xml.etree.ElementTree as ET

from .exceptions import FeedWriteError
from .models import FeedDocument

INDENT = "  "

# ElementTree reserves ns0, ns1, ... for prefixes it generates itself
_RESERVED_PREFIX = re.compile(r"ns\d+$")


def _register_namespaces(document: FeedDocument) -> None:
    for prefix, uri in document.namespaces.items():
        if not prefix or _RESERVED_PREFIX.match(prefix):
            continue
        try:
            ET.register_namespace(prefix, uri)
        except ValueError:
            continue


def to_bytes(document: FeedDocument) -> bytes:
    """Serialize a feed with an XML declaration and two-space indentation."""
    _register_namespaces(document)
    ET.indent(document.root, space=INDENT)
    body = ET.tostring(document.root, encoding="unicode")
    return ('<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n").encode("utf-8")


def write_feed(document: FeedDocument, path: Union[str, Path]) -> Path:
    """
    Atomically write `document` to `path`.

    The feed is staged in a temporary file next to the destination and moved
    over it with os.replace, so readers see either the old file or the new one.
    An existing destination keeps its permission bits, and a symlinked
    destination is followed so the link keeps pointing at the updated file.
    """
    path = Path(path)
    target = Path(os.path.realpath(path))
    data = to_bytes(document)

    try:
        fd, tmp = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    except OSError as e:
        raise FeedWriteError(f"Cannot stage {path}: {e}", path) from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if target.exists():
            shutil.copymode(target, tmp)
        os.replace(tmp, target)
    except OSError as e:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise FeedWriteError(f"Cannot store merged RSS in {path}: {e}", path) from e
    return path
