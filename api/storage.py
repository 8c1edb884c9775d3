"""Persistence hooks for the question bank and the answer history.

Both are stored as plain JSON files under ``DATA_DIR`` so the API survives
restarts. Writes go through a temp file and an atomic rename; a module lock
serializes writers inside one process.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List

from quiz_core.question_bank import load_seed_bank
from quiz_core.types import AnswerMap, AnswerState, Question, QuestionBank


DATA_ROOT = Path(os.getenv("DATA_DIR", "data")).resolve()
BANK_PATH = DATA_ROOT / "questions.json"
ANSWERS_PATH = DATA_ROOT / "answers.json"

_LOCK = threading.Lock()

log = logging.getLogger(__name__)


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("could not read %s, using defaults: %s", path, e)
        return default


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)


def load_bank() -> QuestionBank:
    """Stored bank, or the bundled seed bank on first start."""

    raw: List[Dict[str, Any]] | None = _read_json(BANK_PATH, None)
    if raw is None:
        return load_seed_bank()
    try:
        return [Question.from_dict(r) for r in raw]
    except (KeyError, TypeError, ValueError) as e:
        log.warning("stored bank at %s is invalid, falling back to seed: %s", BANK_PATH, e)
        return load_seed_bank()


def save_bank(bank: QuestionBank) -> None:
    with _LOCK:
        _write_json(BANK_PATH, [q.to_dict() for q in bank])


def load_answers() -> AnswerMap:
    raw: Dict[str, Dict[str, Any]] = _read_json(ANSWERS_PATH, {})
    out: AnswerMap = {}
    for qid, payload in raw.items():
        try:
            out[str(qid)] = AnswerState.from_dict(payload)
        except (KeyError, TypeError, ValueError):
            log.warning("dropping unreadable answer entry for %s", qid)
    return out


def save_answers(answers: AnswerMap) -> None:
    with _LOCK:
        _write_json(ANSWERS_PATH, {qid: st.to_dict() for qid, st in answers.items()})
