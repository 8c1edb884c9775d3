from __future__ import annotations
import logging

from .normalizer import normalize_records
from .parser import parse_records
from .reconcile import reconcile, resolve_mode
from .sanitizer import sanitize
from .types import ImportResult, QuestionBank

log = logging.getLogger(__name__)


def import_batch(existing: QuestionBank, raw_text: str, mode: str) -> ImportResult:
    """Sanitize, parse, normalize and reconcile ``raw_text`` against ``existing``.

    Raises a ``QuizImportError`` subclass when the batch is rejected; in that
    case nothing has been computed against ``existing``. On success a new bank
    is returned and ``answers_reset`` tells the caller to clear answer history.
    """
    resolved = resolve_mode(mode)
    records = parse_records(sanitize(raw_text))
    batch = normalize_records(records)
    bank, report = reconcile(existing, batch.questions, resolved)
    report.warnings.extend(batch.warnings)
    log.info("imported %d records (%s), %d warnings", len(batch), resolved, len(batch.warnings))
    return ImportResult(bank=bank, report=report, answers_reset=(resolved == "replace"))
