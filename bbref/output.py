# output.py
from __future__ import annotations

import csv
import json
import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .logging_utils import get_logger

logger = get_logger(__name__)


class IdGenerator:
    """Thread-safe sequence of output ids: 1, 2, 3, ..."""

    def __init__(self, start: int = 0):
        self._lock = threading.Lock()
        self._last = start

    def next_id(self) -> int:
        with self._lock:
            self._last += 1
            return self._last


class IdMapper:
    """
    Thread-safe id -> player name registry, written out as index.json
    once the crawl has finished.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._names: Dict[int, str] = {}

    def set_name(self, id_: int, name: str) -> None:
        with self._lock:
            self._names[id_] = name

    def get(self, id_: int) -> Optional[str]:
        with self._lock:
            return self._names.get(id_)

    def as_dict(self) -> Dict[str, str]:
        with self._lock:
            return {str(k): self._names[k] for k in sorted(self._names)}

    def __len__(self) -> int:
        with self._lock:
            return len(self._names)

    def dump(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        data = self.as_dict()
        with open(p, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.info("Wrote name index with %d players: %s", len(data), p)
        return p


def write_gamelog_csv(
    path: Union[str, Path],
    stats: Sequence[str],
    rows: List[List[str]],
) -> Path:
    """
    Write one player's gamelog: the stat-key line first, then every row
    in table order. Rows are written as-is, so expanded rows may be wider
    than the header.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(stats)
        writer.writerows(rows)
    logger.debug("Wrote %d rows to %s", len(rows), p)
    return p
