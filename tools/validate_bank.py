from __future__ import annotations
from collections import Counter
from typing import List

from quiz_core.types import QuestionBank
from api.storage import load_bank


def check_bank(bank: QuestionBank) -> List[str]:
    problems: List[str] = []
    counts = Counter(q.key for q in bank)
    for qid, n in counts.items():
        if n > 1:
            problems.append(f"id {qid} used {n} times")
    for q in bank:
        if not q.text.strip():
            problems.append(f"id {q.key}: empty question text")
        if not q.options:
            problems.append(f"id {q.key}: no options")
        elif not 0 <= q.answer_index < len(q.options):
            problems.append(f"id {q.key}: answer {q.answer_index} outside 0..{len(q.options) - 1}")
    return problems


def main() -> int:
    bank = load_bank()
    problems = check_bank(bank)
    print(f"{len(bank)} questions checked.")
    for p in problems:
        print(f" - {p}")
    if not problems:
        print("  ✓ Bank is consistent")
    return 2 if problems else 0


if __name__ == "__main__":
    raise SystemExit(main())
