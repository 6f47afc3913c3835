# Parsing subpackage - model reply extraction and JSON decoding
from .json import parse_json_payload
from .response import extract_response_text

__all__ = [
    "parse_json_payload",
    "extract_response_text",
]
