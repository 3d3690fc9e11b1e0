import pytest

from asciiman.app import (KEY_DIFFICULTIES, KEY_DIRECTIONS, LEADERBOARD_FILTERS, leaderboard_allowed, next_filter,
                          parse_args, score_lines)
from asciiman.difficulty import DIFFICULTY_NAMES
from asciiman.leaderboard import LeaderboardEntry
from asciiman.maze import Direction
from asciiman.rng import LCG
from asciiman.session import GameSession, Status


def test_cli_defaults():
    args = parse_args([])
    assert args.seed is None
    assert args.difficulty is None
    assert not args.fullscreen
    assert not args.verbose


def test_cli_flags():
    args = parse_args(["--seed", "7", "--difficulty", "hard", "--fullscreen",
                       "--leaderboard-url", "http://scores.test", "-v"])
    assert (args.seed, args.difficulty, args.leaderboard_url) == (7, "hard", "http://scores.test")
    assert args.fullscreen and args.verbose


def test_cli_rejects_unknown_difficulty():
    with pytest.raises(SystemExit):
        parse_args(["--difficulty", "nightmare"])


def test_every_direction_and_difficulty_has_a_key():
    assert set(KEY_DIRECTIONS.values()) == set(Direction)
    assert sorted(KEY_DIFFICULTIES.values()) == sorted(DIFFICULTY_NAMES)


def test_leaderboard_filters_cycle_through_all_and_every_mode():
    assert LEADERBOARD_FILTERS == (None, "easy", "medium", "hard", "insane")
    assert next_filter(None) == "easy"
    assert next_filter("insane") is None
    assert next_filter(None, -1) == "insane"


def test_score_lines_show_all_ten_entries():
    entries = [LeaderboardEntry(f"p{i}", 100 - i, i, "hard") for i in range(10)]
    rows = score_lines(entries)
    assert len(rows) == 10
    assert rows[9].startswith("10. p9")
    assert "hard" not in rows[0]


def test_score_lines_add_mode_column_for_mixed_modes():
    rows = score_lines([LeaderboardEntry("amy", 420, 77, "medium")], show_mode=True)
    assert rows[0].endswith("medium")


def test_leaderboard_only_opens_between_games(clock):
    session = GameSession("easy", rng=LCG(1), clock=clock)
    assert not leaderboard_allowed(session.snapshot())
    session.state.status = Status.LOST
    assert leaderboard_allowed(session.snapshot())
