from __future__ import annotations
import sys
from pathlib import Path
from typing import Iterator

def read_messages(path: str|Path="-") -> Iterator[str]:
    """Yields the non-blank lines of a JSONL message log ("-" reads stdin)."""
    if str(path) == "-":
        for line in sys.stdin:
            if line.strip(): yield line.strip()
        return
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip(): yield line.strip()
