"""
Error types for batch import.

Every error carries a message that can be shown to the end user as-is.
Answer coercion problems are never raised; they become report warnings.
"""
from __future__ import annotations
from typing import Any, Dict, Optional


class QuizImportError(Exception):
    """Base error for a rejected batch. The caller's bank is left untouched."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.__class__.__name__, "message": self.message}


class MalformedSyntax(QuizImportError):
    """Text could not be parsed even after sanitization."""

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        super().__init__(
            message
            or "Could not parse the pasted data. Check that the whole [...] array "
            "was copied and that nothing unrecognized follows it."
        )
        self.detail = detail


class MissingArray(QuizImportError):
    """Parsed value holds no usable question array."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Wrong structure: no question array found (expected [...] or an "
            "object with a questions, data or list array)."
        )


class MissingField(QuizImportError):
    """A required field is absent on one record (1-based index)."""

    def __init__(self, field: str, record_index: int):
        if field == "options":
            message = f"Question {record_index}: options must be an array."
        else:
            message = f"Question {record_index} is missing its {field} text."
        super().__init__(message)
        self.field = field
        self.record_index = record_index

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["field"] = self.field
        d["record"] = self.record_index
        return d


class EmptyBatch(QuizImportError):
    """Structurally valid input with no usable records."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "No valid questions found. Check that the data is not empty.")
