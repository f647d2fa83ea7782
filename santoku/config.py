from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (santoku package directory)
_SANTOKU_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _SANTOKU_DIR / 'prelude'
_DEFAULT_HISTORY_FILE = Path('~/.santoku_history')
_DEFAULT_HISTORY_LENGTH = 1000
_DEFAULT_RECURSION_LIMIT = 4000
_DEFAULT_LOG_LEVEL = 'WARNING'

PRELUDE_FILENAME = 'prelude.lspy'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_prelude_roots() -> List[Path]:
    return paths_from_env('SANTOKU_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR]) or [_DEFAULT_PRELUDE_DIR]


def get_prelude_file() -> Path:
    """First existing prelude along SANTOKU_PRELUDE_PATH.

    Each entry is a directory holding prelude.lspy or the file itself. When
    none exists the first candidate is returned, so callers can report it.
    """
    candidates = [
        root / PRELUDE_FILENAME if root.is_dir() else root
        for root in get_prelude_roots()
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return candidates[0]


def get_history_file() -> Path:
    raw = os.environ.get('SANTOKU_HISTORY_FILE')
    return Path(raw or _DEFAULT_HISTORY_FILE).expanduser()


def get_history_length() -> int:
    return int_from_env('SANTOKU_HISTORY_LENGTH', _DEFAULT_HISTORY_LENGTH)


def get_recursion_limit() -> int:
    return int_from_env('SANTOKU_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)


def get_log_level() -> str:
    return os.environ.get('SANTOKU_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
