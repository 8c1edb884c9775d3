from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

from .config import RANDOM_QUIZ_SIZE
from .importer import import_batch
from .types import AnswerMap, AnswerState, ImportResult, Question, QuestionBank, QuestionId

log = logging.getLogger(__name__)

StudyMode = Literal["sequential", "random", "mistake", "search"]
STUDY_MODES: tuple[str, ...] = ("sequential", "random", "mistake", "search")


@dataclass
class StudySession:
    """Owns the bank and the answer history.

    The import pipeline never sees this object; it receives ``bank`` and
    returns a new one, which ``commit_import`` installs only on success.
    Callers must not run two mutations on the same session concurrently.
    """
    bank: QuestionBank
    answers: AnswerMap = field(default_factory=dict)

    def find(self, question_id: QuestionId) -> Optional[Question]:
        key = str(question_id)
        return next((q for q in self.bank if q.key == key), None)

    def record_answer(self, question_id: QuestionId, selected: int) -> AnswerState:
        q = self.find(question_id)
        if q is None:
            raise KeyError(str(question_id))
        if not 0 <= selected < len(q.options):
            raise ValueError(f"option {selected} out of range for question {q.key}")
        if q.key in self.answers:
            raise ValueError(f"question {q.key} already answered")
        state = AnswerState(selected_option=selected, is_correct=(selected == q.answer_index))
        self.answers[q.key] = state
        return state

    def wrong_ids(self) -> List[str]:
        return [qid for qid, st in self.answers.items() if not st.is_correct]

    def queue(self, mode: StudyMode, term: Optional[str] = None, rng: Optional[random.Random] = None) -> List[Question]:
        if mode == "sequential":
            return list(self.bank)
        if mode == "random":
            r = rng or random.Random()
            return r.sample(self.bank, min(RANDOM_QUIZ_SIZE, len(self.bank)))
        if mode == "mistake":
            wrong = set(self.wrong_ids())
            return [q for q in self.bank if q.key in wrong]
        if mode == "search":
            needle = (term or "").strip().lower()
            if not needle:
                return []
            return [
                q for q in self.bank
                if needle in q.text.lower() or any(needle in o.lower() for o in q.options)
            ]
        raise ValueError(f"unknown study mode {mode!r}")

    def reset(self) -> None:
        log.info("clearing %d answers", len(self.answers))
        self.answers = {}

    def prepare_import(self, raw_text: str, mode: str) -> ImportResult:
        """Run the pipeline against the current bank without touching the session."""
        return import_batch(self.bank, raw_text, mode)

    def commit_import(self, result: ImportResult) -> None:
        self.bank = result.bank
        if result.answers_reset:
            self.answers = {}

    def apply_import(self, raw_text: str, mode: str) -> ImportResult:
        result = self.prepare_import(raw_text, mode)
        self.commit_import(result)
        return result

    def stats(self) -> Dict[str, int]:
        live = {q.key for q in self.bank}
        answered = [st for qid, st in self.answers.items() if qid in live]
        correct = sum(1 for st in answered if st.is_correct)
        return {
            "total": len(self.bank),
            "answered": len(answered),
            "correct": correct,
            "wrong": len(answered) - correct,
        }
