from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal, Union

from .config import DEFAULT_EXPLANATION

QuestionId = Union[str, int]
ImportMode = Literal["replace", "merge"]


@dataclass
class Question:
    id: QuestionId
    text: str
    options: List[str]
    answer_index: int = 0
    explanation: str = DEFAULT_EXPLANATION

    @property
    def key(self) -> str:
        return str(self.id)

    def with_id(self, new_id: QuestionId) -> "Question":
        return replace(self, id=new_id, options=list(self.options))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "question": self.text,
            "options": list(self.options),
            "answer": self.answer_index,
            "explanation": self.explanation,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Question":
        return cls(
            id=raw["id"],
            text=raw["question"],
            options=list(raw["options"]),
            answer_index=int(raw.get("answer", 0)),
            explanation=raw.get("explanation") or DEFAULT_EXPLANATION,
        )


QuestionBank = List[Question]


@dataclass
class AnswerState:
    selected_option: int
    is_correct: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"selectedOption": self.selected_option, "isCorrect": self.is_correct}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "AnswerState":
        return cls(selected_option=int(raw["selectedOption"]), is_correct=bool(raw["isCorrect"]))


AnswerMap = Dict[str, AnswerState]


@dataclass
class ImportReport:
    mode: ImportMode
    added: int = 0
    skipped_duplicate: int = 0
    renamed: int = 0
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "added": self.added,
            "skippedDuplicate": self.skipped_duplicate,
            "renamed": self.renamed,
            "warnings": list(self.warnings),
        }


@dataclass
class ImportResult:
    bank: QuestionBank
    report: ImportReport
    answers_reset: bool = False
