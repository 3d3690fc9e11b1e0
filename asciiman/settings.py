# settings.py
# Data directory and persisted user settings (settings.json).

import json
import logging
import os
from pathlib import Path

from .difficulty import DEFAULT_DIFFICULTY

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "ASCIIMAN_DATA_DIR"
LEADERBOARD_URL_ENV = "ASCIIMAN_LEADERBOARD_URL"

DEFAULT_LEADERBOARD_URL = "http://localhost:3001"

DEFAULTS = {
    "seed": None,
    "difficulty": DEFAULT_DIFFICULTY,
    "leaderboard_url": DEFAULT_LEADERBOARD_URL,
    "windowed": True,
}


def data_dir(create=True) -> Path:
    """Where records, settings and crash logs live.

    ``$ASCIIMAN_DATA_DIR`` wins, otherwise ``~/.asciiman``.
    """
    env = os.environ.get(DATA_DIR_ENV)
    path = Path(env).expanduser() if env else Path.home() / ".asciiman"
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def settings_path(base=None) -> Path:
    return (base or data_dir()) / "settings.json"


def load_settings(path=None):
    """Stored settings merged over the defaults; environment overrides last."""
    p = path or settings_path()
    out = dict(DEFAULTS)
    if p.exists():
        try:
            with open(p, "r", encoding="utf-8") as f:
                stored = json.load(f)
            if isinstance(stored, dict):
                out.update({k: v for k, v in stored.items() if k in DEFAULTS})
            else:
                logger.warning("[settings] ignoring %s: not a JSON object", p)
        except (OSError, ValueError) as e:
            logger.warning("[settings] could not read %s: %s", p, e)
    env_url = os.environ.get(LEADERBOARD_URL_ENV)
    if env_url:
        out["leaderboard_url"] = env_url
    if out["seed"] is not None:
        try:
            out["seed"] = int(out["seed"])
        except (TypeError, ValueError):
            logger.warning("[settings] bad seed %r, ignoring", out["seed"])
            out["seed"] = None
    out["windowed"] = bool(out["windowed"])
    return out


def save_settings(settings, path=None):
    p = path or settings_path()
    d = {k: settings.get(k, DEFAULTS[k]) for k in DEFAULTS}
    try:
        with open(p, "w", encoding="utf-8") as f:
            json.dump(d, f, ensure_ascii=False, indent=2)
    except OSError as e:
        logger.warning("[settings] could not write %s: %s", p, e)
