"""Azure OpenAI connection settings for the explanation bridge.

Each field is read from ``AZURE_OPENAI_<FIELD>`` first; anything left unset
is filled from ``.azure_config.json`` in the working directory, using the
field names as keys.
"""
from __future__ import annotations
import functools, json, logging, os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, List, Optional
from openai import AzureOpenAI

log = logging.getLogger(__name__)

CONFIG_FILE = Path(".azure_config.json")
DEFAULT_API_VERSION = "2024-08-01-preview"


@dataclass(frozen=True)
class AzureSettings:
    endpoint: str = ""
    api_key: str = ""
    deployment: str = ""
    api_version: str = DEFAULT_API_VERSION

    @staticmethod
    def env_name(field_name: str) -> str:
        return f"AZURE_OPENAI_{field_name.upper()}"

    @classmethod
    def load(cls, path: Path = CONFIG_FILE) -> "AzureSettings":
        from_file = _read_file(path)
        values = {
            f.name: os.getenv(cls.env_name(f.name)) or from_file.get(f.name) or f.default
            for f in fields(cls)
        }
        return cls(**values)

    def missing(self) -> List[str]:
        return [self.env_name(f.name) for f in fields(self) if not getattr(self, f.name)]


def _read_file(path: Path) -> Dict[str, str]:
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("ignoring unreadable %s: %s", path, e)
        return {}
    if not isinstance(raw, dict):
        return {}
    return {k: str(v) for k, v in raw.items() if v}


def configured() -> bool:
    return not AzureSettings.load().missing()


def settings() -> AzureSettings:
    s = AzureSettings.load()
    missing = s.missing()
    if missing:
        raise RuntimeError(f"Azure OpenAI not configured. Missing: {', '.join(missing)}")
    return s


@functools.lru_cache(maxsize=4)
def _client_for(s: AzureSettings) -> AzureOpenAI:
    return AzureOpenAI(azure_endpoint=s.endpoint, api_key=s.api_key, api_version=s.api_version)


def client(s: Optional[AzureSettings] = None) -> AzureOpenAI:
    """Client for ``s`` (default: current settings), reused while settings are unchanged."""
    return _client_for(s or settings())
