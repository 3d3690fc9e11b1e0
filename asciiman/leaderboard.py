# leaderboard.py
# Client for the global high score service (POST/GET /api/scores).

import logging
import re
from collections import namedtuple

import requests

from .difficulty import DIFFICULTY_NAMES

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 20
MAX_SCORE = 999999
MAX_TIME = 3600
MAX_ENTRIES = 10

_NOT_ALNUM = re.compile(r"[^a-zA-Z0-9]")

LeaderboardEntry = namedtuple("LeaderboardEntry", ["name", "score", "time", "mode"])


class LeaderboardError(Exception):
    """Submission or retrieval failed; the player can retry or skip."""


def sanitize_name(name):
    return _NOT_ALNUM.sub("", name or "")[:MAX_NAME_LENGTH]


def clamp(value, low, high):
    return max(low, min(high, int(value)))


class ScoreSubmission(namedtuple("ScoreSubmission", ["name", "score", "time", "mode"])):
    __slots__ = ()

    @classmethod
    def build(cls, name, score, time, mode):
        """Sanitise and clamp raw values into something the service accepts.

        Raises ValueError when the name has no usable characters or the
        mode is not a known difficulty.
        """
        clean = sanitize_name(name)
        if not clean:
            raise ValueError("name must contain at least one letter or digit")
        mode = (mode or "").lower()
        if mode not in DIFFICULTY_NAMES:
            raise ValueError(f"unknown mode {mode!r}")
        return cls(clean, clamp(score, 0, MAX_SCORE), clamp(time, 0, MAX_TIME), mode)

    @classmethod
    def from_result(cls, name, result):
        return cls.build(name, result.score, result.time, result.difficulty)


class LeaderboardClient:
    def __init__(self, base_url, timeout=10, http=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # anything with requests.Session's get/post will do
        self.http = http or requests.Session()

    @property
    def scores_url(self):
        return f"{self.base_url}/api/scores"

    def submit(self, submission):
        logger.info("[leaderboard] submitting score=%d time=%d mode=%s",
                    submission.score, submission.time, submission.mode)
        try:
            response = self.http.post(self.scores_url, json=submission._asdict(), timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise LeaderboardError(f"score rejected: {_error_message(e.response)}") from e
        except requests.exceptions.RequestException as e:
            raise LeaderboardError(f"could not reach leaderboard: {e}") from e

    def fetch_scores(self, mode=None):
        """Top entries as served, optionally for one difficulty. Ranking is the service's job."""
        params = {"difficulty": mode.lower()} if mode else None
        try:
            response = self.http.get(self.scores_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            raise LeaderboardError(f"could not load scores: {_error_message(e.response)}") from e
        except ValueError as e:
            # requests' JSONDecodeError is also a RequestException, catch it first
            raise LeaderboardError("leaderboard sent malformed data") from e
        except requests.exceptions.RequestException as e:
            raise LeaderboardError(f"could not reach leaderboard: {e}") from e

        scores = data.get("scores") if isinstance(data, dict) else None
        entries = []
        for raw in (scores or [])[:MAX_ENTRIES]:
            try:
                entries.append(LeaderboardEntry(str(raw["name"]), int(raw["score"]),
                                                int(raw.get("time", 0)), str(raw.get("mode", ""))))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("[leaderboard] skipping malformed entry %r", raw)
        return entries


def _error_message(response):
    if response is None:
        return "no response"
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return body.get("error") or body.get("message") or f"HTTP {response.status_code}"
    return f"HTTP {response.status_code}"
