from __future__ import annotations
import logging
import re

log = logging.getLogger(__name__)

_FENCE_RX = re.compile(r"```[\w+-]*\s*([\s\S]*?)\s*```")
_CITE_RX = re.compile(r"\[cite_start\]|\[cite_end\]|\[cit(?:e|ation):[^\]]*\]")
_TRAILING_COMMA_RX = re.compile(r",\s*([\]}])")


def strip_fence(text: str) -> str:
    m = _FENCE_RX.search(text)
    if m and m.group(1):
        return m.group(1).strip()
    return text


def strip_citations(text: str) -> str:
    return _CITE_RX.sub("", text)


def isolate_array(text: str) -> str:
    first = text.find("[")
    last = text.rfind("]")
    if first != -1 and last != -1 and last > first:
        return text[first:last + 1]
    return text


def drop_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA_RX.sub(r"\1", text)


def sanitize(raw: str) -> str:
    """Best-effort cleanup of pasted chat output. Never raises."""
    text = (raw or "").strip()
    cleaned = drop_trailing_commas(isolate_array(strip_citations(strip_fence(text))))
    if cleaned != text:
        log.debug("sanitized input: %d -> %d chars", len(text), len(cleaned))
    return cleaned
