#!/usr/bin/env python3
"""
Trainee results report.

Reads a results.csv produced by the exercise (cpa.io.ResultWriter) and
computes, per trainee and for the whole course:

- Total submitted exercises
- Success / fail / waste counts and percentages
- Closest separation ever submitted

Optional filters:
    * --mode practice|test     only one exercise mode
    * --since / --until        ISO dates (inclusive)
    * --user                   a single trainee
    * --speed-range A-B        speed differential, kt (inclusive)
    * --angle-range A-B        crossing angle, deg (inclusive)
    * --time-range A-B         time to crossing, min (inclusive)

Usage:
    python analysis.py logs/results.csv
    python analysis.py logs/results.csv --mode test --since 2024-01-01 --sort success
    python analysis.py logs/results.csv --speed-range 20-70 --time-range 5-8
    python analysis.py logs/results.csv --out-csv summary.csv
"""

import argparse
import csv
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, date
from typing import Dict, List, Optional

from cpa.io import Result, load_results
from cpa.models import Verdict
from cpa.outcome import ScoreStats
from sim.scenarios import Range, parse_range


SORT_KEYS = ("user", "total", "success", "fail", "waste")


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@dataclass
class UserSummary:
    user_id: str
    stats: ScoreStats

    def as_row(self) -> Dict[str, object]:
        st = self.stats
        return {
            "user": self.user_id,
            "total": st.total,
            "success": st.counts[Verdict.SUCCESS],
            "fail": st.counts[Verdict.FAIL],
            "waste": st.counts[Verdict.WASTE],
            "success_pct": round(st.percent(Verdict.SUCCESS), 1),
            "fail_pct": round(st.percent(Verdict.FAIL), 1),
            "waste_pct": round(st.percent(Verdict.WASTE), 1),
            "min_sep_nm": round(st.min_sep_nm, 2) if st.total else None,
        }


# ---------------------------------------------------------------------------
# Filtering / aggregation
# ---------------------------------------------------------------------------

def _within(value: Optional[float], bounds: Optional[Range]) -> bool:
    if bounds is None:
        return True
    if value is None:
        return False
    lo, hi = min(bounds), max(bounds)
    return lo <= value <= hi


def filter_results(rows: List[Result],
                   mode: Optional[str] = None,
                   since: Optional[date] = None,
                   until: Optional[date] = None,
                   user: Optional[str] = None,
                   speed_range: Optional[Range] = None,
                   angle_range: Optional[Range] = None,
                   time_range: Optional[Range] = None) -> List[Result]:
    """
    Keep rows matching every given filter. Date and metadata bounds are
    inclusive; a row without a time to crossing never matches a time filter.
    """
    out = []
    for r in rows:
        if mode is not None and r.mode != mode:
            continue
        if since is not None and r.timestamp.date() < since:
            continue
        if until is not None and r.timestamp.date() > until:
            continue
        if user is not None and r.user_id != user:
            continue
        if not _within(r.speed_difference_kts, speed_range):
            continue
        if not _within(r.angle_deg, angle_range):
            continue
        if not _within(r.time_to_crossing_min, time_range):
            continue
        out.append(r)
    return out


def summarize_by_user(rows: List[Result]) -> List[UserSummary]:
    per_user: Dict[str, ScoreStats] = defaultdict(ScoreStats)
    for r in rows:
        per_user[r.user_id].record(r.verdict, r.separation_nm)
    return [UserSummary(u, st) for u, st in per_user.items()]


def course_totals(summaries: List[UserSummary]) -> ScoreStats:
    total = ScoreStats()
    for s in summaries:
        total = total.merge(s.stats)
    return total


def sort_summaries(summaries: List[UserSummary], key: str = "user",
                   descending: bool = False) -> List[UserSummary]:
    if key not in SORT_KEYS:
        raise ValueError(f"unknown sort key: {key}")

    def _key(s: UserSummary):
        if key == "user":
            return s.user_id.lower()
        if key == "total":
            return s.stats.total
        return s.stats.percent(Verdict(key))

    return sorted(summaries, key=_key, reverse=descending)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def print_block(title: str, metrics: Dict[str, object]) -> None:
    print(title)
    for k in metrics:
        print(f"{k:25s}: {metrics[k]}")
    print()


def write_summary_csv(path: str, summaries: List[UserSummary], totals: ScoreStats) -> None:
    rows = [s.as_row() for s in summaries]
    rows.append(UserSummary("TOTAL", totals).as_row())
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        w.writeheader()
        w.writerows(rows)


def _parse_date(text: Optional[str]) -> Optional[date]:
    if text is None:
        return None
    return datetime.fromisoformat(text).date()


def _range_arg(text: str) -> Range:
    try:
        return parse_range(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def main():
    parser = argparse.ArgumentParser(description="Summarize exercise results per trainee.")
    parser.add_argument("results_csv", help="Path to results.csv")
    parser.add_argument("--mode", choices=["practice", "test"], default=None)
    parser.add_argument("--since", default=None, help="ISO date, inclusive")
    parser.add_argument("--until", default=None, help="ISO date, inclusive")
    parser.add_argument("--user", default=None)
    parser.add_argument("--speed-range", type=_range_arg, default=None, help="e.g. 0-150 (kt)")
    parser.add_argument("--angle-range", type=_range_arg, default=None, help="e.g. 20-180 (deg)")
    parser.add_argument("--time-range", type=_range_arg, default=None, help="e.g. 3-10 (min)")
    parser.add_argument("--sort", choices=SORT_KEYS, default="user")
    parser.add_argument("--desc", action="store_true", help="sort descending")
    parser.add_argument("--out-csv", default=None, help="Optional summary CSV output path")
    args = parser.parse_args()

    rows = load_results(args.results_csv)
    rows = filter_results(rows, mode=args.mode, since=_parse_date(args.since),
                          until=_parse_date(args.until), user=args.user,
                          speed_range=args.speed_range, angle_range=args.angle_range,
                          time_range=args.time_range)
    if not rows:
        print("No results recorded for the selected filters.")
        return

    summaries = sort_summaries(summarize_by_user(rows), args.sort, args.desc)
    totals = course_totals(summaries)

    for s in summaries:
        print_block(f"=== {s.user_id} ===", s.as_row())
    print_block("=== Course total ===", UserSummary("TOTAL", totals).as_row())

    if args.out_csv:
        write_summary_csv(args.out_csv, summaries, totals)
        print(f"Summary written to: {args.out_csv}")


if __name__ == "__main__":
    main()
