import json

from asciiman.records import EMPTY_RECORDS, LocalRecordStore, Records
from asciiman.session import GameResult


def test_missing_file_gives_empty_records(tmp_path):
    assert LocalRecordStore(tmp_path / "records.json").load() == EMPTY_RECORDS


def test_record_keeps_best_and_last(tmp_path):
    store = LocalRecordStore(tmp_path / "sub" / "records.json")
    store.record(GameResult(300, 40, True, "easy"))
    updated = store.record(GameResult(120, 15, False, "easy"))
    assert updated == Records(300, 40, 120, 15)
    assert store.load() == updated


def test_higher_score_replaces_best(tmp_path):
    store = LocalRecordStore(tmp_path / "records.json")
    store.record(GameResult(100, 10, False, "easy"))
    assert store.record(GameResult(250, 60, True, "hard")) == Records(250, 60, 250, 60)


def test_equal_score_does_not_replace_best_time(tmp_path):
    store = LocalRecordStore(tmp_path / "records.json")
    store.record(GameResult(100, 10, False, "easy"))
    assert store.record(GameResult(100, 99, False, "easy")).best_time == 10


def test_corrupt_file_is_ignored(tmp_path, caplog):
    path = tmp_path / "records.json"
    path.write_text("{not json", encoding="utf-8")
    assert LocalRecordStore(path).load() == EMPTY_RECORDS
    assert "unreadable" in caplog.text


def test_file_is_plain_json(tmp_path):
    path = tmp_path / "records.json"
    LocalRecordStore(path).record(GameResult(5, 1, False, "easy"))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"best_score": 5, "best_time": 1, "last_score": 5, "last_time": 1}
