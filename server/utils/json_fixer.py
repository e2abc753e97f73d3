"""Compensating transform for JSON text with missing separators.

Some serializers drop the comma between adjacent object members or array
elements. ``fix_malformed_json`` re-inserts them with three regex passes;
it is a heuristic, not a parser, and is not guaranteed for arbitrarily
nested input.
"""
import json
import logging
import re
from typing import Any

from fastapi import Response

logger = logging.getLogger(__name__)

_STRING = r'"(?:[^"\\]|\\.)*"'
_NUMBER = r'(?<![\w.])-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?'
# A quoted member name followed by its colon, matched without consuming it
_NEXT_KEY = rf'(?={_STRING}\s*:)'

# 1. completed scalar directly followed by the next member name
_SCALAR_THEN_KEY_RE = re.compile(rf'({_STRING}|null|true|false|{_NUMBER})(\s*){_NEXT_KEY}')
# 2. two objects back to back inside an array
_ADJACENT_OBJECTS_RE = re.compile(r'\}(\s*)\{')
# 3. closed object directly followed by the next member name
_OBJECT_THEN_KEY_RE = re.compile(rf'\}}(\s*){_NEXT_KEY}')

INTERNAL_ERROR_BODY = '{"error": "Internal server error"}'


def fix_malformed_json(text: str) -> str:
    """Insert missing commas. Passes run in this order and are not reordered."""
    text = _SCALAR_THEN_KEY_RE.sub(r'\1,\2', text)
    text = _ADJACENT_OBJECTS_RE.sub(r'},\1{', text)
    text = _OBJECT_THEN_KEY_RE.sub(r'},\1', text)
    return text


def send_fixed_json(payload: Any, status_code: int = 200) -> Response:
    """Serialize ``payload`` and write the repaired text as the raw body."""
    try:
        body = fix_malformed_json(json.dumps(payload, ensure_ascii=False, default=str))
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to serialize response payload: {e}", exc_info=True)
        return Response(
            content=INTERNAL_ERROR_BODY,
            status_code=500,
            media_type="application/json",
        )

    return Response(
        content=body,
        status_code=status_code,
        media_type="application/json",
    )
