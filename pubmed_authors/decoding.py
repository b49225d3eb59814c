"""Decode E-utilities XML payloads into nested dictionaries."""

from __future__ import annotations

from typing import Any, Dict, List, Union
from xml.parsers.expat import ExpatError

import xmltodict

TEXT_KEY = "#text"
ATTRIBUTE_PREFIX = "@"


def decode_xml(payload: Union[str, bytes]) -> Dict[str, Any]:
    """Parse ``payload`` into ``{root_tag: value}``.

    Leaf elements without attributes collapse to their text (``None`` when
    empty), attributes are stored under ``@name`` keys, the text of an element
    that also has children or attributes lives under ``#text``, and a tag
    repeated among siblings becomes a list.
    """
    try:
        return xmltodict.parse(
            payload,
            attr_prefix=ATTRIBUTE_PREFIX,
            cdata_key=TEXT_KEY,
        )
    except ExpatError as exc:
        raise ValueError(f"Could not parse XML payload: {exc}") from exc


def as_list(value: Any) -> List[Any]:
    """Normalize a field that may hold a single value or a list of values."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


__all__ = ["TEXT_KEY", "as_list", "decode_xml"]
