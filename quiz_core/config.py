from __future__ import annotations
import os, json, pathlib


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


DEFAULT_EXPLANATION: str = "No explanation available."

ANSWER_LETTERS: str = "ABCDEF"
FINGERPRINT_SEP: str = "|"
OPTION_JOIN: str = ","

ID_PREFIX: str = "imported"
RENAME_TAG: str = "imported"

ARRAY_KEYS: tuple[str, ...] = ("questions", "data", "list")
TEXT_KEYS: tuple[str, ...] = ("question", "Question", "title", "Title", "q")
OPTION_KEYS: tuple[str, ...] = ("options", "Options", "choices", "answers")
# later keys override earlier ones
ANSWER_KEYS: tuple[str, ...] = ("answer", "Answer", "correct", "correctAnswer")
EXPLANATION_KEYS: tuple[str, ...] = ("explanation", "Explanation", "analysis", "desc")

MODE_ALIASES: dict[str, str] = {
    "replace": "replace",
    "overwrite": "replace",
    "merge": "merge",
    "append": "merge",
}

RANDOM_QUIZ_SIZE: int = 50

EXPLAIN_ENABLED: bool = True
EXPLAIN_MAX_TOKENS: int = 300
EXPLAIN_MAX_CHARS: int = 150
EXPLAIN_TIMEOUT_SEC: float = 20.0
EXPLAIN_FALLBACK: str = "The explanation service could not be reached. Check the network or API key configuration."
EXPLAIN_UNAVAILABLE: str = "An AI explanation is not available right now, please try again later."

# // env overrides for deployments.
RANDOM_QUIZ_SIZE = _env_int("RANDOM_QUIZ_SIZE", RANDOM_QUIZ_SIZE)
EXPLAIN_ENABLED = _env_bool("EXPLAIN_ENABLED", EXPLAIN_ENABLED)
EXPLAIN_MAX_TOKENS = _env_int("EXPLAIN_MAX_TOKENS", EXPLAIN_MAX_TOKENS)
EXPLAIN_TIMEOUT_SEC = _env_float("EXPLAIN_TIMEOUT_SEC", EXPLAIN_TIMEOUT_SEC)


def _env_true(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1","true","yes","on")
def load_config() -> dict:
    cfg = {}
    p = pathlib.Path("config.json")
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except Exception: cfg = {}
    e = os.environ
    if e.get("EXPLAIN_ENABLED"): cfg["EXPLAIN_ENABLED"] = _env_true("EXPLAIN_ENABLED")
    if e.get("LLM_BACKEND"): cfg["LLM_BACKEND"] = e.get("LLM_BACKEND")
    return cfg
def get_backend(cfg: dict) -> str|None:
    if not cfg.get("EXPLAIN_ENABLED", EXPLAIN_ENABLED): return None
    b = (cfg.get("LLM_BACKEND") or "").lower().strip()
    return b if b == "azure" else None
