"""I/O helpers for reading suite files and writing report pages."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def load_json(path: str) -> Any:
    """Return the decoded content of a UTF-8 ``.json`` file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_text(path: str, content: str) -> None:
    """Write ``content`` to ``path``, replacing any existing file.

    The parent directory must already exist.
    """
    Path(path).write_text(content, encoding="utf-8")
