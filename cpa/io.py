import csv, os
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from .models import Verdict

FIELDS = [
    "timestamp",
    "user_id",
    "mode",
    "result",
    "separation_nm",
    "speed_difference_kts",
    "angle_deg",
    "time_to_crossing_min",
    "callsign1",
    "callsign2",
    "turn1_deg",
    "turn2_deg",
    "constraints_met",
]


@dataclass
class Result:
    """One submitted exercise, as stored."""
    timestamp: datetime
    user_id: str
    mode: str
    verdict: Verdict
    separation_nm: float
    speed_difference_kts: float
    angle_deg: float
    time_to_crossing_min: Optional[float]
    callsign1: str
    callsign2: str
    turn1_deg: int
    turn2_deg: int
    constraints_met: bool = True

    def to_row(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
            "user_id": self.user_id,
            "mode": self.mode,
            "result": self.verdict.value,
            "separation_nm": f"{self.separation_nm:.2f}",
            "speed_difference_kts": f"{self.speed_difference_kts:.1f}",
            "angle_deg": f"{self.angle_deg:.1f}",
            "time_to_crossing_min": (
                "" if self.time_to_crossing_min is None else f"{self.time_to_crossing_min:.2f}"
            ),
            "callsign1": self.callsign1,
            "callsign2": self.callsign2,
            "turn1_deg": self.turn1_deg,
            "turn2_deg": self.turn2_deg,
            "constraints_met": 1 if self.constraints_met else 0,
        }


def _bool_from_int_str(value: Optional[str], default: bool = False) -> bool:
    """Helper to parse '0'/'1' (or missing) into bool."""
    if value is None:
        return default
    value = value.strip()
    if value == "":
        return default
    try:
        return bool(int(value))
    except ValueError:
        return value.lower() in ("1", "true", "yes", "y")


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    return float(value)


class ResultWriter:
    """
    Appends results to a CSV file, writing the header once.

    Subscribe `append` to the bus' VERDICT topic.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        log_dir = os.path.dirname(path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        new_file = not os.path.exists(path) or os.path.getsize(path) == 0
        self._file = open(path, "a", newline="", encoding="utf-8")
        self._writer = csv.DictWriter(self._file, fieldnames=FIELDS)
        if new_file:
            self._writer.writeheader()
            self._file.flush()

    def append(self, result: Result) -> None:
        if self._file is None:
            return
        self._writer.writerow(result.to_row())
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


def load_results(path: str) -> List[Result]:
    """Load a results CSV, oldest first."""
    rows: List[Result] = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for r in reader:
            try:
                rows.append(
                    Result(
                        timestamp=datetime.fromisoformat(r["timestamp"]),
                        user_id=r["user_id"],
                        mode=r["mode"],
                        verdict=Verdict(r["result"].strip().lower()),
                        separation_nm=float(r["separation_nm"]),
                        speed_difference_kts=float(r["speed_difference_kts"]),
                        angle_deg=float(r["angle_deg"]),
                        time_to_crossing_min=_optional_float(r["time_to_crossing_min"]),
                        callsign1=r["callsign1"],
                        callsign2=r["callsign2"],
                        turn1_deg=int(r["turn1_deg"]),
                        turn2_deg=int(r["turn2_deg"]),
                        constraints_met=_bool_from_int_str(r.get("constraints_met"), default=True),
                    )
                )
            except KeyError as e:
                raise RuntimeError(f"Missing expected column in CSV: {e}")
    rows.sort(key=lambda x: x.timestamp)
    return rows
