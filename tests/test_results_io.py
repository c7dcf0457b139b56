import csv
from datetime import datetime

import pytest

from cpa.io import FIELDS, Result, ResultWriter, load_results
from cpa.models import Verdict


def make_result(**overrides):
    base = dict(
        timestamp=datetime(2024, 3, 1, 9, 30, 0),
        user_id="trainee1",
        mode="test",
        verdict=Verdict.SUCCESS,
        separation_nm=6.25,
        speed_difference_kts=40.0,
        angle_deg=92.5,
        time_to_crossing_min=6.5,
        callsign1="CTN123",
        callsign2="BAW77A",
        turn1_deg=15,
        turn2_deg=0,
        constraints_met=True,
    )
    base.update(overrides)
    return Result(**base)


def test_write_then_load(tmp_path):
    path = tmp_path / "results.csv"
    writer = ResultWriter(str(path))
    writer.append(make_result())
    writer.append(make_result(timestamp=datetime(2024, 3, 1, 9, 0, 0),
                              verdict=Verdict.FAIL, separation_nm=1.5,
                              time_to_crossing_min=None, constraints_met=False))
    writer.close()

    rows = load_results(str(path))
    assert len(rows) == 2
    # sorted oldest first
    first, second = rows
    assert first.verdict is Verdict.FAIL
    assert first.time_to_crossing_min is None
    assert first.constraints_met is False
    assert second.callsign2 == "BAW77A"
    assert second.turn1_deg == 15
    assert second.separation_nm == pytest.approx(6.25)


def test_header_written_once_across_sessions(tmp_path):
    path = tmp_path / "results.csv"
    for _ in range(2):
        w = ResultWriter(str(path))
        w.append(make_result())
        w.close()

    with path.open(newline="") as f:
        lines = list(csv.reader(f))
    assert lines[0] == FIELDS
    assert len(lines) == 3


def test_append_after_close_is_ignored(tmp_path):
    path = tmp_path / "results.csv"
    w = ResultWriter(str(path))
    w.close()
    w.append(make_result())
    assert load_results(str(path)) == []


def test_missing_column_is_reported(tmp_path):
    path = tmp_path / "broken.csv"
    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["timestamp", "user_id"])
        w.writerow(["2024-03-01T09:00:00", "trainee1"])

    with pytest.raises(RuntimeError, match="Missing expected column"):
        load_results(str(path))
