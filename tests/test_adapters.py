import json

import pytest

from arcadesnake.adapters import FileStorage, FrameScheduler, MemoryStorage
from arcadesnake.config import HIGH_SCORE_KEY
from arcadesnake.game import GameStatus


# ---------- FrameScheduler ----------

def test_request_runs_once():
    scheduler = FrameScheduler()
    seen = []
    scheduler.request(seen.append)

    assert scheduler.run_pending(16.0) == 1
    assert scheduler.run_pending(32.0) == 0
    assert seen == [16.0]


def test_callbacks_requested_while_running_wait_for_next_frame():
    scheduler = FrameScheduler()
    seen = []

    def again(now):
        seen.append(now)
        scheduler.request(again)

    scheduler.request(again)
    scheduler.run_pending(1.0)
    scheduler.run_pending(2.0)

    assert seen == [1.0, 2.0]
    assert len(scheduler) == 1


def test_cancel_drops_callback():
    scheduler = FrameScheduler()
    seen = []
    handle = scheduler.request(seen.append)
    scheduler.cancel(handle)
    scheduler.cancel(handle)
    scheduler.cancel(12345)

    assert scheduler.run_pending(1.0) == 0
    assert seen == []


def test_callback_can_cancel_a_later_one():
    scheduler = FrameScheduler()
    seen = []
    handles = {}
    handles["first"] = scheduler.request(lambda now: scheduler.cancel(handles["second"]))
    handles["second"] = scheduler.request(seen.append)

    assert scheduler.run_pending(1.0) == 1
    assert seen == []


def test_handles_are_unique():
    scheduler = FrameScheduler()
    a = scheduler.request(lambda now: None)
    b = scheduler.request(lambda now: None)
    assert a != b


# ---------- Storage ----------

def test_memory_storage():
    storage = MemoryStorage({"a": "1"})
    assert storage.get("a") == "1"
    assert storage.get("missing") is None
    storage.set("b", 5)
    assert storage.get("b") == 5


def test_file_storage_missing_file(tmp_path):
    assert FileStorage(str(tmp_path / "scores.json")).get(HIGH_SCORE_KEY) is None


def test_file_storage_round_trip(tmp_path):
    path = tmp_path / "nested" / "scores.json"
    storage = FileStorage(str(path))
    storage.set(HIGH_SCORE_KEY, 80)
    storage.set("other", 1)

    assert FileStorage(str(path)).get(HIGH_SCORE_KEY) == 80
    assert json.loads(path.read_text()) == {HIGH_SCORE_KEY: 80, "other": 1}


def test_file_storage_malformed_raises(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        FileStorage(str(path)).get(HIGH_SCORE_KEY)

    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        FileStorage(str(path)).get(HIGH_SCORE_KEY)


def test_engine_survives_corrupt_score_file(tmp_path, make_engine):
    path = tmp_path / "scores.json"
    path.write_text("garbage")
    engine = make_engine(storage=FileStorage(str(path)))
    assert engine.get_game_state().high_score == 0


def test_high_score_survives_engine_instances(tmp_path, make_engine):
    path = str(tmp_path / "scores.json")
    engine = make_engine(storage=FileStorage(path))
    engine.start_game()
    engine.set_score(70)
    engine.end_game()
    assert engine.get_game_state().status is GameStatus.GAME_OVER

    again = make_engine(storage=FileStorage(path))
    assert again.get_game_state().high_score == 70
