from __future__ import annotations

import importlib
import os
import sys

import pytest

from quiz_core.types import Question


def build_bank(count: int = 3, *, prefix: str = "q", option_count: int = 4) -> list[Question]:
    """Create a deterministic bank for tests."""

    items: list[Question] = []
    for idx in range(1, count + 1):
        items.append(
            Question(
                id=idx,
                text=f"{prefix} question {idx}?",
                options=[f"{prefix}{idx} option {n}" for n in range(option_count)],
                answer_index=idx % option_count,
                explanation=f"because {idx}",
            )
        )
    return items


_APP_MODULES = [
    "api.storage",
    "api.app",
]


def reload_app(tmp_path) -> tuple[object, object]:
    os.environ["DATA_DIR"] = str(tmp_path)
    for name in _APP_MODULES:
        if name in sys.modules:
            importlib.reload(sys.modules[name])
        else:
            __import__(name)
    storage = sys.modules["api.storage"]
    app_module = sys.modules["api.app"]
    return storage, app_module


@pytest.fixture
def bank() -> list[Question]:
    return build_bank()
