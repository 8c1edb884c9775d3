from __future__ import annotations

import pytest

from quiz_core import config, llm_bridge
from quiz_core.types import Question


QUESTION = Question(id="h1", text="Which HTTP code means Unauthorized?", options=["200", "401", "404"], answer_index=1)


@pytest.fixture
def azure_backend(monkeypatch):
    monkeypatch.setenv("LLM_BACKEND", "azure")
    monkeypatch.delenv("EXPLAIN_ENABLED", raising=False)
    monkeypatch.setattr(config, "EXPLAIN_ENABLED", True)


def test_prompt_names_both_options():
    prompt = llm_bridge.build_prompt(QUESTION, 2)
    assert '"404"' in prompt and '"401"' in prompt
    assert QUESTION.text in prompt


def test_no_backend_returns_unavailable(monkeypatch):
    monkeypatch.delenv("LLM_BACKEND", raising=False)
    called = []
    monkeypatch.setattr(llm_bridge, "_explain_azure", lambda prompt: called.append(prompt) or "x")
    assert llm_bridge.explain(QUESTION, 0) == config.EXPLAIN_UNAVAILABLE
    assert called == []


def test_disabled_by_env(monkeypatch):
    monkeypatch.setenv("LLM_BACKEND", "azure")
    monkeypatch.setenv("EXPLAIN_ENABLED", "0")
    assert llm_bridge.backend_in_use() == "none"


def test_azure_text_is_returned(azure_backend, monkeypatch):
    monkeypatch.setattr(llm_bridge, "_explain_azure", lambda prompt: "  401 means the request needs auth.  ")
    assert llm_bridge.explain(QUESTION, 0) == "401 means the request needs auth."


def test_azure_failure_degrades_to_fallback(azure_backend, monkeypatch, caplog):
    def boom(prompt):
        raise RuntimeError("Azure OpenAI not configured")

    monkeypatch.setattr(llm_bridge, "_explain_azure", boom)
    assert llm_bridge.explain(QUESTION, 0) == config.EXPLAIN_FALLBACK
    assert any("explanation call failed" in r.getMessage() for r in caplog.records)


def test_empty_reply_is_unavailable(azure_backend, monkeypatch):
    monkeypatch.setattr(llm_bridge, "_explain_azure", lambda prompt: "")
    assert llm_bridge.explain(QUESTION, 0) == config.EXPLAIN_UNAVAILABLE


def test_prompt_tolerates_out_of_range_answer():
    odd = Question(id="h2", text="Odd?", options=["a", "b"], answer_index=9)
    prompt = llm_bridge.build_prompt(odd, 0)
    assert 'Correct option: ""' in prompt


def test_explain_never_raises_on_inconsistent_question(azure_backend, monkeypatch):
    odd = Question(id="h2", text="Odd?", options=["a", "b"], answer_index=9)
    seen = []
    monkeypatch.setattr(llm_bridge, "_explain_azure", lambda prompt: seen.append(prompt) or "fine")
    assert llm_bridge.explain(odd, 5) == "fine"
    monkeypatch.setattr(llm_bridge, "build_prompt", lambda q, i: q.options[q.answer_index])
    assert llm_bridge.explain(odd, 5) == config.EXPLAIN_FALLBACK
    assert len(seen) == 1
