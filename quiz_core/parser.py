from __future__ import annotations
import json
import logging
from typing import Any, List

from .config import ARRAY_KEYS
from .errors import MalformedSyntax, MissingArray

log = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def unwrap_records(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        for key in ARRAY_KEYS:
            if isinstance(value.get(key), list):
                return value[key]
    raise MissingArray()


def parse_records(text: str) -> List[Any]:
    """Strict JSON parse of sanitized text, unwrapped to a flat record list."""
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError) as e:
        log.info("batch rejected, invalid JSON: %s", e)
        raise MalformedSyntax(detail=str(e)) from e
    return unwrap_records(value)
