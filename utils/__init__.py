# Utils package - Utility modules organized by domain
# Import from subpackages for convenience

from .cost import build_cost, estimate_vision_cost_usd
from .parsing import extract_response_text, parse_json_payload
from .validation import validate_vision_result

__all__ = [
    "build_cost",
    "estimate_vision_cost_usd",
    "extract_response_text",
    "parse_json_payload",
    "validate_vision_result",
]
