"""JSON file helpers: tolerant reads, atomic writes."""

from __future__ import annotations

import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)


def load_json(path: str, default: dict | None = None) -> dict:
    """Load a JSON object from *path*; return *default* if missing or broken."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return default if default is not None else {}
    except (OSError, ValueError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return default if default is not None else {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: top-level JSON value is not an object", path)
        return default if default is not None else {}
    return data


def save_json(path: str, data: dict) -> None:
    """Write *data* to *path* through a temp file in the same directory."""
    dir_path = os.path.dirname(os.path.abspath(path))
    os.makedirs(dir_path, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=dir_path, suffix=".json.tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
