# records.py
# Best/last score and time kept on the local machine (records.json).

import json
import logging
from collections import namedtuple

logger = logging.getLogger(__name__)

Records = namedtuple("Records", ["best_score", "best_time", "last_score", "last_time"])

EMPTY_RECORDS = Records(0, 0, 0, 0)


class LocalRecordStore:
    """Reads once at start-up, writes when a game ends. Never touched mid-game."""

    def __init__(self, path):
        self.path = path

    def load(self) -> Records:
        if not self.path.exists():
            return EMPTY_RECORDS
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Records(*(int(data.get(k, 0)) for k in Records._fields))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("[records] unreadable %s (%s), starting fresh", self.path, e)
            return EMPTY_RECORDS

    def record(self, result) -> Records:
        """Store a finished game: last always, best only when the score beats it."""
        current = self.load()
        best_score, best_time = current.best_score, current.best_time
        if result.score > current.best_score:
            best_score, best_time = result.score, result.time
            logger.info("[records] new best score %d", best_score)
        updated = Records(best_score, best_time, result.score, result.time)
        self._write(updated)
        return updated

    def _write(self, records):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(records._asdict(), f, ensure_ascii=False, indent=2)
