from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import click

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)\s*(ms|s|sec|secs|m|min|mins|h|hr|hrs|d)(?![A-Za-z])")

_DURATION_UNITS = {
    "ms": 0.001,
    "s": 1.0,
    "sec": 1.0,
    "secs": 1.0,
    "m": 60.0,
    "min": 60.0,
    "mins": 60.0,
    "h": 3600.0,
    "hr": 3600.0,
    "hrs": 3600.0,
    "d": 86400.0,
}


def load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
        f.write("\n")


def parse_duration(text: str) -> float:
    """
    Parse a human duration such as ``30s``, ``1m 30s`` or ``500ms``.

    Returns:
        Duration in seconds

    Raises:
        ValueError: If the text is empty or contains anything but
            ``<number><unit>`` groups
    """
    stripped = text.strip()
    if not stripped:
        raise ValueError("Empty duration")

    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(stripped):
        if stripped[position:match.start()].strip():
            raise ValueError(f"Invalid duration: {text}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()

    if position == 0 or stripped[position:].strip():
        raise ValueError(f"Invalid duration: {text}")
    return total


def strip_ansi(text: str) -> str:
    return click.unstyle(text)


def pad_right_ansi_aware(styled: str, width: int) -> str:
    """Pad a possibly styled string to ``width`` visible characters."""
    visible = len(strip_ansi(styled))
    return styled + " " * max(width - visible, 0)
