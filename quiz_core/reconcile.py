from __future__ import annotations
import logging
from typing import Iterable, List, Set, Tuple

from .config import FINGERPRINT_SEP, MODE_ALIASES, OPTION_JOIN
from .ids import rename_id
from .types import ImportMode, ImportReport, Question, QuestionBank

log = logging.getLogger(__name__)


def fingerprint(q: Question) -> str:
    return f"{q.text.strip()}{FINGERPRINT_SEP}{OPTION_JOIN.join(q.options)}"


def resolve_mode(mode: str) -> ImportMode:
    key = (mode or "").strip().lower()
    if key not in MODE_ALIASES:
        raise ValueError(f"unknown import mode {mode!r}; expected 'replace' or 'merge'")
    return MODE_ALIASES[key]  # type: ignore[return-value]


def replace_bank(batch: Iterable[Question]) -> Tuple[QuestionBank, ImportReport]:
    bank = list(batch)
    return bank, ImportReport(mode="replace", added=len(bank))


def merge_bank(existing: QuestionBank, batch: Iterable[Question]) -> Tuple[QuestionBank, ImportReport]:
    seen_content: Set[str] = {fingerprint(q) for q in existing}
    seen_ids: Set[str] = {q.key for q in existing}
    report = ImportReport(mode="merge")
    appended: List[Question] = []

    for q in batch:
        # only checked against the pre-existing bank, not earlier batch records
        if fingerprint(q) in seen_content:
            report.skipped_duplicate += 1
            continue
        if q.key in seen_ids:
            q = q.with_id(rename_id(q.id))
            report.renamed += 1
        appended.append(q)
        seen_ids.add(q.key)
        report.added += 1

    log.info(
        "merge: added=%d skipped=%d renamed=%d (bank %d -> %d)",
        report.added, report.skipped_duplicate, report.renamed,
        len(existing), len(existing) + len(appended),
    )
    return list(existing) + appended, report


def reconcile(existing: QuestionBank, batch: Iterable[Question], mode: str) -> Tuple[QuestionBank, ImportReport]:
    """Combine ``batch`` with ``existing``. Neither input is modified."""
    if resolve_mode(mode) == "replace":
        return replace_bank(batch)
    return merge_bank(existing, batch)
