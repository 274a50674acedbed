"""
Normalization of raw model output into a parsed JSON value.
"""

import json
import logging
import re
from typing import Any

from ..exceptions import ParseError

logger = logging.getLogger(__name__)

# Opening "```json" fence line and closing fence line, anywhere in the text
_JSON_FENCE_RE = re.compile(r"```json\n|\n```")


def strip_json_fences(raw: str) -> str:
    """Remove ```json / ``` fence markers and surrounding whitespace."""
    return _JSON_FENCE_RE.sub("", raw.strip()).strip()


def _reject_constant(name: str) -> Any:
    # NaN/Infinity are not JSON and cannot be rendered back to the client
    raise ValueError(f"Non-standard JSON constant: {name}")


def normalize_response(raw: str) -> Any:
    """
    Parse the generator's raw text as JSON.

    No schema validation is performed: missing or extra keys pass
    through untouched.

    Raises:
        ParseError: If the text is not strict JSON after fence stripping.
    """
    cleaned = strip_json_fences(raw)
    try:
        return json.loads(cleaned, parse_constant=_reject_constant)
    except ValueError as e:
        logger.error("Failed to parse model response: %s", cleaned[:500])
        raise ParseError(f"Invalid JSON in model response: {e}") from e
