from __future__ import annotations
import logging, time
from .types import Question
from . import config
from .azure_cfg import client as azure_client, settings as azure_settings

log = logging.getLogger(__name__)

SYSTEM_PROMPT = ("You are a patient tutor reviewing a multiple-choice question. "
                 "Answer in plain language and stay under {limit} words.")

def backend_in_use() -> str:
    return config.get_backend(config.load_config()) or "none"

def _option(question: Question, index: int) -> str:
    return question.options[index] if 0 <= index < len(question.options) else ""

def build_prompt(question: Question, selected_index: int) -> str:
    picked = _option(question, selected_index)
    correct = _option(question, question.answer_index)
    return (
        f'Question: "{question.text}"\n\n'
        f'The learner chose: "{picked}"\n'
        f'Correct option: "{correct}"\n\n'
        "1. Explain why the learner's choice is wrong.\n"
        "2. Explain why the correct option is right.\n"
        "3. Give a memory aid or a related fact."
    )

def _explain_azure(prompt: str) -> str:
    s = azure_settings(); cli = azure_client(s)
    resp = cli.chat.completions.create(
        model=s.deployment,
        messages=[{"role":"system","content":SYSTEM_PROMPT.format(limit=config.EXPLAIN_MAX_CHARS)},
                  {"role":"user","content":prompt}],
        temperature=0.3, max_tokens=config.EXPLAIN_MAX_TOKENS,
        timeout=config.EXPLAIN_TIMEOUT_SEC,
    )
    return resp.choices[0].message.content or ""

def explain(question: Question, selected_index: int) -> str:
    """Supplementary explanation for an answered question. Never raises."""
    t0 = time.time()
    try:
        backend = backend_in_use()
        if backend == "none":
            return config.EXPLAIN_UNAVAILABLE
        text = _explain_azure(build_prompt(question, selected_index)).strip()
    except Exception:
        log.exception("explanation call failed for question %s", question.key)
        return config.EXPLAIN_FALLBACK
    log.info("explanation for %s via %s in %d ms", question.key, backend, int((time.time()-t0)*1000))
    return text or config.EXPLAIN_UNAVAILABLE
