"""
Record normalization: alias resolution, answer coercion and id assignment.

Each raw record is a loosely shaped mapping produced by a chat assistant.
Field names vary (``question`` vs ``q`` vs ``title``), answers arrive as
letters, numbers, numeric strings or the option text itself, and ids are
often missing. ``normalize_records`` turns a list of such records into
``Question`` objects or rejects the whole batch.
"""
from __future__ import annotations
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .config import (
    ANSWER_KEYS,
    ANSWER_LETTERS,
    DEFAULT_EXPLANATION,
    EXPLANATION_KEYS,
    OPTION_KEYS,
    TEXT_KEYS,
)
from .errors import EmptyBatch, MissingField
from .ids import synthesize_id
from .types import Question

log = logging.getLogger(__name__)

_INT_PREFIX_RX = re.compile(r"^\s*([+-]?\d+)")

_MISSING = object()


@dataclass
class NormalizedBatch:
    questions: List[Question]
    warnings: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.questions)


def first_present(record: Dict[str, Any], keys: Sequence[str]) -> Any:
    """First non-empty value among ``keys``, in order."""
    for k in keys:
        v = record.get(k)
        if v is None or v == "" or v is False:
            continue
        return v
    return None


def last_present(record: Dict[str, Any], keys: Sequence[str]) -> Any:
    """Value of the last key in ``keys`` that exists on the record."""
    found: Any = _MISSING
    for k in keys:
        if k in record:
            found = record[k]
    return found


# ---- answer coercion chain ----
# Each step returns an index or None to pass to the next one.

def _from_letter(raw: Any, options: List[str]) -> Optional[int]:
    if not isinstance(raw, str):
        return None
    s = raw.strip().upper()
    if len(s) == 1 and s in ANSWER_LETTERS:
        return ord(s) - ord("A")
    return None


def _from_int_string(raw: Any, options: List[str]) -> Optional[int]:
    if not isinstance(raw, str):
        return None
    m = _INT_PREFIX_RX.match(raw)
    return int(m.group(1)) if m else None


def _from_option_text(raw: Any, options: List[str]) -> Optional[int]:
    if not isinstance(raw, str):
        return None
    want = raw.strip()
    for i, opt in enumerate(options):
        if opt.strip() == want:
            return i
    return None


def _from_number(raw: Any, options: List[str]) -> Optional[int]:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    if isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            return None
        return int(raw)
    return raw


ANSWER_CHAIN: tuple[Callable[[Any, List[str]], Optional[int]], ...] = (
    _from_letter,
    _from_int_string,
    _from_option_text,
    _from_number,
)


def coerce_answer(raw: Any, options: List[str]) -> Optional[int]:
    """Resolve ``raw`` to an in-range option index, or None if it cannot be."""
    if raw is _MISSING:
        return None
    for step in ANSWER_CHAIN:
        idx = step(raw, options)
        if idx is not None:
            return idx if 0 <= idx < len(options) else None
    return None


def _text_of(record: Dict[str, Any], position: int) -> str:
    text = first_present(record, TEXT_KEYS)
    if text is None:
        raise MissingField("question", position)
    text = str(text)
    if not text.strip():
        raise MissingField("question", position)
    return text


def _options_of(record: Dict[str, Any], position: int) -> List[str]:
    opts = first_present(record, OPTION_KEYS)
    if not isinstance(opts, list) or not opts:
        raise MissingField("options", position)
    return [o if isinstance(o, str) else str(o) for o in opts]


def _id_of(record: Dict[str, Any], position: int) -> Any:
    rid = record.get("id")
    if rid is None or rid == "" or isinstance(rid, (bool, list, dict)):
        return synthesize_id(position)
    return rid


def normalize_record(record: Any, index: int, warnings: List[str]) -> Question:
    position = index + 1
    if not isinstance(record, dict):
        raise MissingField("question", position)

    text = _text_of(record, position)
    options = _options_of(record, position)
    explanation = first_present(record, EXPLANATION_KEYS)

    raw_answer = last_present(record, ANSWER_KEYS)
    answer_index = coerce_answer(raw_answer, options)
    if answer_index is None:
        shown = None if raw_answer is _MISSING else raw_answer
        msg = f"Question {position} has invalid answer {shown!r}; defaulting to option A."
        log.warning("answer fallback for record %d (%r): %r", position, text[:60], shown)
        warnings.append(msg)
        answer_index = 0

    return Question(
        id=_id_of(record, position),
        text=text,
        options=options,
        answer_index=answer_index,
        explanation=str(explanation) if explanation is not None else DEFAULT_EXPLANATION,
    )


def normalize_records(records: Sequence[Any]) -> NormalizedBatch:
    """All-or-nothing: a MissingField on any record discards the whole batch."""
    warnings: List[str] = []
    questions = [normalize_record(r, i, warnings) for i, r in enumerate(records)]
    if not questions:
        raise EmptyBatch()
    return NormalizedBatch(questions=questions, warnings=warnings)
