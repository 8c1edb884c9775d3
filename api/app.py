from __future__ import annotations
from fastapi import FastAPI, HTTPException, Body, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import os, threading, typing as t

# ---- Core imports ----
from quiz_core.azure_cfg import configured as azure_configured
from quiz_core.errors import QuizImportError
from quiz_core.llm_bridge import backend_in_use, explain
from quiz_core.study import STUDY_MODES, StudySession
from quiz_core.types import Question
from .storage import load_answers, load_bank, save_answers, save_bank

# single owner of bank + answers; every mutation holds _STATE_LOCK
STATE = StudySession(bank=load_bank(), answers=load_answers())
_STATE_LOCK = threading.Lock()

app = FastAPI(title="Quiz Bank API")

@app.get("/")
def root():
    return {"status": "ok", "service": "quiz-bank-api"}

ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

# ---- Schemas ----
class ImportReq(BaseModel):
    text: str
    mode: str = "merge"  # "merge" | "replace"

class AnswerReq(BaseModel):
    question_id: int | str
    selected: int

class ExplainReq(BaseModel):
    question_id: int | str
    selected: int

# ---- Helpers ----
def _serialize_question(q: Question) -> dict[str, t.Any]:
    return q.to_dict()

def _require_question(question_id: int | str) -> Question:
    q = STATE.find(question_id)
    if q is None:
        raise HTTPException(404, "question not found")
    return q

@app.exception_handler(QuizImportError)
def _import_error(_request, exc: QuizImportError):
    return JSONResponse(status_code=422, content=exc.to_dict())

# ---- Health ----
@app.get("/health")
def health():
    return {
        "llm_backend": backend_in_use(),
        "azure_config_present": azure_configured(),
        "questions": len(STATE.bank),
        "answers": len(STATE.answers),
    }

# ---- Bank ----
@app.get("/bank")
def get_bank():
    return {"questions": [_serialize_question(q) for q in STATE.bank]}

@app.post("/bank/import")
def import_questions(req: ImportReq = Body(...)):
    with _STATE_LOCK:
        try:
            result = STATE.prepare_import(req.text, req.mode)
        except ValueError as e:
            raise HTTPException(400, str(e))
        # disk first; the session only changes once both writes succeed
        save_bank(result.bank)
        if result.answers_reset:
            save_answers({})
        STATE.commit_import(result)
    return {"report": result.report.to_dict(), "total": len(STATE.bank), "answers_reset": result.answers_reset}

# ---- Answers ----
@app.post("/answers")
def answer(req: AnswerReq):
    with _STATE_LOCK:
        q = _require_question(req.question_id)
        try:
            state = STATE.record_answer(q.id, req.selected)
        except ValueError as e:
            status = 409 if q.key in STATE.answers else 400
            raise HTTPException(status, str(e))
        save_answers(STATE.answers)
    return {
        "question_id": q.id,
        "selected": state.selected_option,
        "is_correct": state.is_correct,
        "answer": q.answer_index,
        "explanation": q.explanation,
    }

@app.post("/answers/reset")
def reset_answers():
    with _STATE_LOCK:
        STATE.reset()
        save_answers(STATE.answers)
    return {"ok": True}

@app.get("/stats")
def stats():
    return STATE.stats()

# ---- Study queues ----
@app.get("/study/{mode}")
def study_queue(mode: str, term: str | None = Query(None, description="Search term for mode=search")):
    if mode not in STUDY_MODES:
        raise HTTPException(404, f"unknown study mode {mode}")
    queue = STATE.queue(mode, term=term)
    return {"mode": mode, "questions": [_serialize_question(q) for q in queue]}

# ---- Explanation (separate call, never on the answer path) ----
@app.post("/explain")
def explain_answer(req: ExplainReq):
    q = _require_question(req.question_id)
    if not 0 <= req.selected < len(q.options):
        raise HTTPException(400, "selected option out of range")
    return {"question_id": q.id, "text": explain(q, req.selected)}
