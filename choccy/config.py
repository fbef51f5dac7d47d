from __future__ import annotations
import os
from pathlib import Path
from typing import Optional


_DEFAULT_MAX_DEPTH = 128
_DEFAULT_PROMPT = "choccy> "
_DEFAULT_LOG_LEVEL = "WARNING"


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def get_max_depth() -> int:
    return int_from_env('CHOCCY_MAX_DEPTH', _DEFAULT_MAX_DEPTH)


def get_prompt() -> str:
    return os.environ.get('CHOCCY_PROMPT') or _DEFAULT_PROMPT


def get_history_file() -> Optional[Path]:
    raw = os.environ.get('CHOCCY_HISTORY_FILE')
    if not raw or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()


def get_log_level() -> str:
    return (os.environ.get('CHOCCY_LOG_LEVEL') or _DEFAULT_LOG_LEVEL).upper()
