import logging

from asciiman.difficulty import DEFAULT_DIFFICULTY, DIFFICULTY_NAMES, PROFILES, get_profile, next_difficulty


def test_every_profile_has_four_ghosts_with_positive_tuning():
    for profile in PROFILES.values():
        assert len(profile.ghosts) == 4
        assert profile.pickup_score > 0 and profile.special_score > 0
        for ghost in profile.ghosts:
            assert ghost.speed > 0
            assert ghost.lock_on_duration > 0


def test_insane_profile_values():
    insane = get_profile("insane")
    assert (insane.pickup_score, insane.special_score) == (20, 100)
    assert [g.speed for g in insane.ghosts] == [180, 200, 250, 250]
    assert [g.lock_on_duration for g in insane.ghosts] == [30, 30, 20, 20]


def test_special_values_per_mode():
    assert [PROFILES[n].special_score for n in DIFFICULTY_NAMES] == [50, 60, 75, 100]


def test_lookup_is_case_insensitive():
    assert get_profile(" Hard ").name == "hard"


def test_unknown_name_falls_back_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="asciiman.difficulty"):
        assert get_profile("impossible").name == DEFAULT_DIFFICULTY
    assert "impossible" in caplog.text


def test_missing_name_is_default_without_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="asciiman.difficulty"):
        assert get_profile(None).name == DEFAULT_DIFFICULTY
    assert caplog.records == []


def test_next_difficulty_cycles():
    assert next_difficulty("easy") == "medium"
    assert next_difficulty("insane") == "easy"
