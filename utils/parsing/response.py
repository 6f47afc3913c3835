"""
Text extraction from hosted model replies.

A reply can carry its payload in a flat ``output_text`` field, in typed output
items, or inside a "message" item's content parts. The shapes are checked in a
fixed priority order and the first non-empty match wins.
"""

import json
from typing import Any, Iterable, Mapping, Optional

TEXT_ITEM_TYPES = ("output_text",)
JSON_ITEM_TYPES = ("json", "json_object")
MESSAGE_ITEM_TYPE = "message"
MESSAGE_TEXT_PART_TYPES = ("output_text", "text")


def _non_empty(text: Any) -> bool:
    return isinstance(text, str) and len(text.strip()) > 0


def _json_payload_text(item: Mapping[str, Any]) -> Optional[str]:
    payload = item.get("json")
    if payload is None or payload == "":
        return None
    stringified = payload if isinstance(payload, str) else json.dumps(payload)
    return stringified if _non_empty(stringified) else None


def _message_part_text(part: Mapping[str, Any]) -> Optional[str]:
    part_type = part.get("type")
    if part_type in MESSAGE_TEXT_PART_TYPES and _non_empty(part.get("text")):
        return part["text"].strip()
    if part_type in JSON_ITEM_TYPES:
        return _json_payload_text(part)
    return None


def _output_items(reply: Mapping[str, Any]) -> Iterable[Mapping[str, Any]]:
    output = reply.get("output")
    if not isinstance(output, list):
        return []
    return [item for item in output if isinstance(item, Mapping)]


def extract_response_text(reply: Mapping[str, Any]) -> Optional[str]:
    """
    Find the single text payload expected to hold the JSON result.

    Priority:
    1. top-level ``output_text`` (non-empty after trimming)
    2. "output_text" items
    3. "json" / "json_object" items, stringified when not already text
    4. "message" items, searching their content parts for text or JSON

    Returns None when nothing matches; callers treat that as an empty response.
    """
    if not isinstance(reply, Mapping):
        return None

    if _non_empty(reply.get("output_text")):
        return reply["output_text"]

    for item in _output_items(reply):
        item_type = item.get("type")

        if item_type in TEXT_ITEM_TYPES and _non_empty(item.get("text")):
            return item["text"]

        if item_type in JSON_ITEM_TYPES:
            text = _json_payload_text(item)
            if text is not None:
                return text

        if item_type == MESSAGE_ITEM_TYPE:
            content = item.get("content")
            if not isinstance(content, list):
                continue
            for part in content:
                if not isinstance(part, Mapping):
                    continue
                text = _message_part_text(part)
                if text is not None:
                    return text

    return None
