# tools/import_questions.py
from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path
from typing import List

from quiz_core.errors import QuizImportError
from quiz_core.study import StudySession
from api.storage import load_answers, load_bank, save_answers, save_bank


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Import pasted quiz questions into the local store.")
    ap.add_argument("file", help="text file with the pasted questions, or - for stdin")
    ap.add_argument("--mode", choices=["merge", "replace"], default="merge")
    ap.add_argument("--dry-run", action="store_true", help="print the report without saving")
    ap.add_argument("-v", "--verbose", action="store_true")
    a = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if a.verbose else logging.INFO, format="[%(levelname)s] %(message)s")

    text = sys.stdin.read() if a.file == "-" else Path(a.file).read_text(encoding="utf-8")
    session = StudySession(bank=load_bank(), answers=load_answers())
    before = len(session.bank)
    try:
        result = session.prepare_import(text, a.mode)
    except QuizImportError as e:
        print(f"Import rejected: {e.message}", file=sys.stderr)
        return 1

    print(json.dumps(result.report.to_dict(), indent=2, ensure_ascii=False))
    print(f"Bank: {before} -> {len(result.bank)} questions")
    if a.dry_run:
        print("Dry run, nothing saved.")
        return 0
    save_bank(result.bank)
    if result.answers_reset:
        save_answers({})
        print("Answer history cleared.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
