from __future__ import annotations

import copy
import json

import pytest

from quiz_core.errors import EmptyBatch, MalformedSyntax, MissingArray, MissingField
from quiz_core.importer import import_batch
from quiz_core.types import Question


def _payload(questions: list[Question]) -> str:
    return json.dumps([q.to_dict() for q in questions])


def test_fenced_reply_into_empty_bank():
    raw = '```json\n[{"id":1,"question":"Q?","options":["a","b"],"answer":"B"}]\n```'
    result = import_batch([], raw, "merge")
    assert len(result.bank) == 1
    q = result.bank[0]
    assert (q.id, q.text, q.options, q.answer_index) == (1, "Q?", ["a", "b"], 1)
    r = result.report
    assert (r.added, r.skipped_duplicate, r.renamed) == (1, 0, 0)
    assert result.answers_reset is False


def test_out_of_range_answer_does_not_abort():
    raw = '[{"question":"Q2","options":["x","y","z"],"answer":"5"}]'
    result = import_batch([], raw, "merge")
    assert result.bank[0].answer_index == 0
    assert len(result.report.warnings) == 1


def test_importing_same_batch_twice(bank):
    batch = [Question(id=f"n{i}", text=f"new {i}", options=["a", "b"]) for i in range(4)]
    raw = _payload(batch)
    first = import_batch(bank, raw, "merge")
    second = import_batch(first.bank, raw, "merge")
    assert first.report.added == len(batch)
    r = second.report
    assert (r.added, r.skipped_duplicate, r.renamed) == (0, len(batch), 0)
    assert len(second.bank) == len(first.bank)


def test_reused_ids_with_new_content(bank):
    raw = _payload([Question(id=q.id, text=q.text + " (v2)", options=q.options) for q in bank])
    result = import_batch(bank, raw, "merge")
    r = result.report
    assert (r.added, r.renamed) == (len(bank), len(bank))
    keys = [q.key for q in result.bank]
    assert len(keys) == len(set(keys))


def test_replace_requests_answer_reset(bank):
    raw = _payload(bank)
    result = import_batch(bank, raw, "replace")
    assert result.answers_reset is True
    assert [q.key for q in result.bank] == [q.key for q in bank]


def test_missing_options_on_second_record_leaves_bank_untouched(bank):
    before = copy.deepcopy(bank)
    raw = json.dumps(
        [
            {"question": "one", "options": ["a", "b"]},
            {"question": "two"},
            {"question": "three", "options": ["a", "b"]},
        ]
    )
    with pytest.raises(MissingField) as exc:
        import_batch(bank, raw, "merge")
    assert exc.value.field == "options"
    assert exc.value.record_index == 2
    assert bank == before


def test_wrapped_object_and_prose():
    raw = 'Here is your quiz:\n{"data": [{"q": "W?", "choices": ["yes", "no"], "correct": "no"}]}\nEnjoy!'
    result = import_batch([], raw, "merge")
    assert result.bank[0].text == "W?"
    assert result.bank[0].answer_index == 1


def test_cited_reply_imports():
    raw = '[cite_start][{"question": "Q", "options": ["a", "b"], "answer": 1} [citation: 3]][cite_end]'
    result = import_batch([], raw, "merge")
    assert [q.text for q in result.bank] == ["Q"]
    assert result.bank[0].answer_index == 1


@pytest.mark.parametrize(
    "raw, err",
    [
        ("[{]", MalformedSyntax),
        ("[" * 200000 + "]" * 200000, MalformedSyntax),
        ('{"items": 1}', MissingArray),
        ("[]", EmptyBatch),
    ],
    ids=["broken", "too-deep", "no-array", "empty"],
)
def test_rejections(raw, err, bank):
    with pytest.raises(err):
        import_batch(bank, raw, "merge")


def test_unknown_mode_rejected_before_parsing(bank):
    with pytest.raises(ValueError):
        import_batch(bank, "[]", "sideways")
