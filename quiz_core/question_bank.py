from __future__ import annotations
import json
from pathlib import Path
from typing import List
from .types import Question

SEED_PATH = Path(__file__).resolve().parent / "data" / "bank.json"

def load_seed_bank() -> List[Question]:
    raw = json.loads(SEED_PATH.read_text(encoding="utf-8"))
    return [Question.from_dict(r) for r in raw]
