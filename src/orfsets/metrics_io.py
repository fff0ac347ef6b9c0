from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Mapping


def read_summary(path: str | Path) -> Dict:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        data = json.loads(p.read_text())
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def write_run_summary(path: str | Path, command: str, options: Mapping, counters: Mapping) -> Dict:
    """Record one run under its command name, keeping entries for other commands."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    merged = read_summary(p)
    merged[command] = {"options": dict(options), "counts": dict(counters)}
    p.write_text(json.dumps(merged, indent=2, sort_keys=True) + "\n")
    return merged


__all__ = ["read_summary", "write_run_summary"]
