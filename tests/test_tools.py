from __future__ import annotations

import json

from quiz_core.types import Question
from tests.conftest import build_bank, reload_app


def _tools(tmp_path):
    reload_app(tmp_path)
    import importlib

    import tools.import_questions as importer_cli
    import tools.validate_bank as validator

    return importlib.reload(importer_cli), importlib.reload(validator)


def test_import_cli_merges_and_saves(tmp_path, capsys):
    importer_cli, _ = _tools(tmp_path)
    src = tmp_path / "paste.txt"
    src.write_text('Sure!\n```json\n[{"question": "CLI?", "options": ["a", "b"], "answer": "a"},]\n```', encoding="utf-8")

    assert importer_cli.main([str(src)]) == 0
    out = capsys.readouterr().out
    assert '"added": 1' in out
    saved = json.loads((tmp_path / "questions.json").read_text(encoding="utf-8"))
    assert len(saved) == 4


def test_import_cli_dry_run_and_rejection(tmp_path, capsys):
    importer_cli, _ = _tools(tmp_path)
    src = tmp_path / "paste.txt"
    src.write_text('[{"question": "CLI?", "options": ["a"]}]', encoding="utf-8")
    assert importer_cli.main([str(src), "--dry-run"]) == 0
    assert not (tmp_path / "questions.json").exists()

    src.write_text("no data here", encoding="utf-8")
    assert importer_cli.main([str(src), "--mode", "replace"]) == 1
    assert "Import rejected" in capsys.readouterr().err


def test_check_bank_flags_problems(tmp_path):
    _, validator = _tools(tmp_path)
    bank = build_bank(2)
    assert validator.check_bank(bank) == []
    bank.append(Question(id="1", text=" ", options=["a"], answer_index=3))
    problems = validator.check_bank(bank)
    assert "id 1 used 2 times" in problems
    assert any("empty question text" in p for p in problems)
    assert any("outside 0..0" in p for p in problems)
