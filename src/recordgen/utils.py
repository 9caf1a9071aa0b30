"""Shared utilities for recordgen."""

import contextlib
import os
from pathlib import Path


def atomic_write_text(filepath: Path, text: str, encoding: str = "utf-8") -> None:
    """Write generated text atomically so a failed run never leaves a half-written module."""
    tmp_path = filepath.with_suffix(filepath.suffix + ".tmp")
    try:
        tmp_path.write_text(text, encoding=encoding)
        os.replace(tmp_path, filepath)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace (including newlines) in a type expression."""
    return " ".join(text.split())
