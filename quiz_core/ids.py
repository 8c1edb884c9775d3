from __future__ import annotations
import itertools
import random
import string

from .config import ID_PREFIX, RENAME_TAG

_COUNTER = itertools.count(1)
_RNG = random.Random()
_ALPHABET = string.ascii_lowercase + string.digits


def fresh_token() -> str:
    """Process-unique token: monotonic counter plus a short random tail."""
    n = next(_COUNTER)
    tail = "".join(_RNG.choice(_ALPHABET) for _ in range(5))
    return f"{n:x}{tail}"


def synthesize_id(position: int) -> str:
    return f"{ID_PREFIX}_{fresh_token()}_{position}"


def rename_id(original: object) -> str:
    return f"{original}_{RENAME_TAG}_{fresh_token()}"
