"""Fetch a feed over HTTP and normalize it into nested mappings.

Markup feeds are turned into the same shape a JSON feed would already
have, so downstream code only ever walks dicts and lists:

    {"rss": {"channel": [{"item": [{...}, {...}]}]}}

Each child element name maps to a list of values. Leaf elements become
their text; elements with attributes keep them under "$" and their text
under "_". Namespaced names keep the prefix used in the document
(e.g. "letterboxd:watchedDate").
"""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

ATTRS_KEY = "$"
TEXT_KEY = "_"

_BOM_STR = "\ufeff"
_BOM_BYTES = b"\xef\xbb\xbf"


class FetchError(RuntimeError):
    """The feed could not be retrieved."""


class ParseError(ValueError):
    """The feed body is neither valid JSON nor valid markup."""


def fetch_feed(url: str, timeout: Optional[float] = None) -> Any:
    """
    GET the feed once and return its body.

    JSON responses come back decoded; anything else is returned as raw
    bytes so the XML declaration decides the encoding.
    """
    logger.info("Fetching feed %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"Could not fetch {url}: {exc}") from exc

    content_type = response.headers.get("Content-Type", "").lower()
    if "json" in content_type:
        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON feed at {url}: {exc}") from exc
    return response.content


def parse_feed(body: Any) -> Any:
    """
    Return structured bodies unchanged; decode JSON text; parse markup into nested mappings.

    JSON is recognised by the body itself, whatever the Content-Type said.
    """
    if isinstance(body, (dict, list)):
        return body
    if not isinstance(body, (str, bytes)):
        raise ParseError(f"Unsupported feed body type: {type(body).__name__}")

    if _looks_like_json(body):
        try:
            return json.loads(body.lstrip(_BOM_STR) if isinstance(body, str) else body)
        except ValueError as exc:
            raise ParseError(f"Invalid JSON feed: {exc}") from exc

    parser = ET.XMLPullParser(events=("start-ns", "end"))
    prefixes: Dict[str, str] = {}
    root: Optional[ET.Element] = None
    try:
        parser.feed(body)
        parser.close()
    except ET.ParseError as exc:
        raise ParseError(f"Malformed feed markup: {exc}") from exc

    for event, payload in parser.read_events():
        if event == "start-ns":
            prefix, uri = payload
            prefixes.setdefault(uri, prefix)
        else:
            root = payload

    if root is None:
        raise ParseError("Feed markup has no root element.")
    return {_qualified_name(root.tag, prefixes): _element_value(root, prefixes)}


def _looks_like_json(body: str | bytes) -> bool:
    if isinstance(body, bytes):
        head = body.lstrip(_BOM_BYTES + b" \t\r\n")[:1]
        return head in (b"{", b"[")
    head = body.lstrip(_BOM_STR + " \t\r\n")[:1]
    return head in ("{", "[")


def _qualified_name(name: str, prefixes: Dict[str, str]) -> str:
    if not name.startswith("{"):
        return name
    uri, _, local = name[1:].partition("}")
    prefix = prefixes.get(uri)
    return f"{prefix}:{local}" if prefix else local


def _element_value(element: ET.Element, prefixes: Dict[str, str]) -> Any:
    children = list(element)
    text = (element.text or "") + "".join(child.tail or "" for child in children)
    if not element.attrib and not children:
        return text

    node: Dict[str, Any] = {}
    if element.attrib:
        node[ATTRS_KEY] = {
            _qualified_name(key, prefixes): value
            for key, value in element.attrib.items()
        }
    if text.strip():
        node[TEXT_KEY] = text
    for child in children:
        key = _qualified_name(child.tag, prefixes)
        node.setdefault(key, []).append(_element_value(child, prefixes))
    return node


def feed_items(data: Any) -> List[Any]:
    """Return ``rss.channel[0].item``; a missing section yields no entries."""
    rss = data.get("rss") if isinstance(data, dict) else None
    channels = rss.get("channel") if isinstance(rss, dict) else None
    if not isinstance(channels, list) or not channels:
        return []
    channel = channels[0]
    items = channel.get("item") if isinstance(channel, dict) else None
    if not isinstance(items, list):
        return []
    return list(items)
