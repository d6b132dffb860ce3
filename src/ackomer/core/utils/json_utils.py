"""
Helpers for pulling JSON out of free-text LLM replies.
"""

import json
import re
from typing import Any, Dict, List, Optional

_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Return the outermost ``{...}`` block of ``text`` parsed as a dict, or None."""
    if not text:
        return None
    match = _OBJECT_PATTERN.search(text)
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json_array(text: Optional[str]) -> Optional[List[Any]]:
    """Return the outermost ``[...]`` block of ``text`` parsed as a list, or None."""
    if not text:
        return None
    match = _ARRAY_PATTERN.search(text)
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, list) else None
