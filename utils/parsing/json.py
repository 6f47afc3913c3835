import json
import logging
from typing import Any

from analyzer.errors import VisionParseError

logger = logging.getLogger(__name__)


def parse_json_payload(response_text: str) -> Any:
    """
    Strict JSON decode of the extracted model reply.

    No repair is attempted: a reply that is not valid JSON is a failed
    analysis, never a best-effort one.

    Raises:
        VisionParseError: if the text is not valid JSON
    """
    try:
        return json.loads(response_text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"❌ Vision reply is not valid JSON: {e} (preview: {str(response_text)[:200]!r})")
        raise VisionParseError("Failed to parse vision model response as JSON", e) from e
