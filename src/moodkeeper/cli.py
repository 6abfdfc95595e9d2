from __future__ import annotations

import argparse
import csv
import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ._util import _fmt_time, today_key
from .chart import ChartLayout, to_svg
from .days import is_day_key, parse_day_key, parse_time_of_day, relative_day_label
from .errors import MoodkeeperError
from .history import DateRange, HistoryQuery, MoodFilter, SortOrder
from .log import setup_logging
from .models import ATTRIBUTE_KEYS, ATTRIBUTE_LABELS, NO_DATA, Maybe, MoodEntry, mood_emoji, mood_label
from .paths import resolve_data_path
from .session import MoodSession, seed_samples
from .stats import Period
from .storage import load_entries


# -------------------------
# Formatting helpers
# -------------------------

def _fmt_avg(value: Maybe) -> str:
    if value is NO_DATA:
        return "—"
    return f"{mood_emoji(value)} {value:.1f}"


def _plural_days(n: int) -> str:
    return f"{n} day{'s' if n != 1 else ''}"


def _fmt_tod(tod: str | None) -> str:
    if not tod:
        return "unknown-time"
    return _fmt_time(datetime.combine(date(2000, 1, 1), parse_time_of_day(tod)))


def _sparkline(values: list[Maybe], vmin: float = 1.0, vmax: float = 10.0) -> str:
    if not values:
        return ""
    blocks = "▁▂▃▄▅▆▇█"
    span = max(1e-9, vmax - vmin)
    out = []
    for v in values:
        if v is NO_DATA:
            # a gap, not a low value
            out.append(" ")
            continue
        x = (v - vmin) / span
        idx = int(round(x * (len(blocks) - 1)))
        idx = max(0, min(len(blocks) - 1, idx))
        out.append(blocks[idx])
    return "".join(out)


# -------------------------
# Print blocks
# -------------------------

def _print_entry_block(entry: MoodEntry, today: str) -> None:
    print("```")
    print("📒 Mood Log")
    print(f"- 📅 Date: {relative_day_label(entry.day_key, today)}")
    print(f"- 🕒 Time: {_fmt_tod(entry.time_of_day)}")
    print(f"- {mood_emoji(entry.overall_mood)} Mood (1–10): {entry.overall_mood} ({mood_label(entry.overall_mood)})")
    for key in ATTRIBUTE_KEYS:
        name, icon = ATTRIBUTE_LABELS[key]
        print(f"- {icon} {name}: {entry.attributes.get(key)}")
    if entry.notes:
        print(f"- 📝 Notes: {entry.notes}")
    print("```")


def _entry_line(entry: MoodEntry, today: str) -> str:
    attrs = " ".join(f"{ATTRIBUTE_LABELS[k][1]}{entry.attributes.get(k)}" for k in ATTRIBUTE_KEYS)
    line = f"{relative_day_label(entry.day_key, today)} — {entry.overall_mood}/10 {mood_label(entry.overall_mood)} [{attrs}]"
    if entry.notes:
        line += f" ({entry.notes})"
    return line


# -------------------------
# CSV helpers
# -------------------------

HISTORY_CSV_FIELDS = [
    "date",
    "time",
    "mood",
    "label",
    "energy",
    "sleep",
    "stress",
    "productivity",
    "social",
    "notes",
]


def _write_csv(out_path: Path, fieldnames: list[str], rows: list[dict[str, Any]]) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames, quoting=csv.QUOTE_MINIMAL)
        w.writeheader()
        if rows:
            w.writerows(rows)


def _history_row(entry: MoodEntry) -> dict[str, Any]:
    row: dict[str, Any] = {
        "date": entry.day_key,
        "time": entry.time_of_day or "",
        "mood": entry.overall_mood,
        "label": mood_label(entry.overall_mood),
        "notes": entry.notes,
    }
    row.update(entry.attributes.to_dict())
    return row


# -------------------------
# Session setup
# -------------------------

def _build_session(args: argparse.Namespace) -> MoodSession:
    session = MoodSession(clock=lambda: args.today)
    if args.data_path is None:
        seed_samples(session, args.today)
        return session

    session.store.load_scope(session.store.active_scope, load_entries(args.data_path))
    return session


# -------------------------
# Commands
# -------------------------

def cmd_today(args: argparse.Namespace) -> None:
    session = _build_session(args)
    entry = session.today_entry()
    if entry is None:
        print(f"No mood logged today ({args.today}).")
        return
    if args.json:
        print(json.dumps(entry.to_dict(), indent=2, sort_keys=True, ensure_ascii=False))
        return
    _print_entry_block(entry, args.today)


def cmd_stats(args: argparse.Namespace) -> None:
    session = _build_session(args)
    if not len(session.store):
        print("No mood entries yet.")
        return

    bundle = session.stats()
    print(f"=== Mood Stats (today: {args.today}) ===")
    print(f"- weekly average: {_fmt_avg(bundle.weekly_average)}")
    print(f"- monthly average: {_fmt_avg(bundle.monthly_average)}")
    print(f"- streak: {_plural_days(bundle.streak)}")
    print(f"- total tracked: {_plural_days(bundle.total)}")

    print("\n[Attributes (all entries)]")
    for a in bundle.attributes:
        bar = "▇" * int(round(a.percent / 10))
        print(f"- {a.icon} {a.label}: {a.display:.1f}/10 {bar}")

    print("\n[Time of day]")
    for band, count in bundle.time_of_day.items():
        print(f"- {band}: {count}")


def cmd_history(args: argparse.Namespace) -> None:
    session = _build_session(args)
    query = HistoryQuery(
        date_range=DateRange(args.range),
        mood=MoodFilter(args.mood),
        search=args.search or "",
        sort=SortOrder(args.sort),
    )
    entries = session.history(query)

    if args.csv:
        out_path = Path(args.csv).expanduser().resolve()
        _write_csv(out_path, HISTORY_CSV_FIELDS, [_history_row(e) for e in entries])
        print(f"📄 Exported {len(entries)} history rows → {out_path}")
        return

    if not len(session.store):
        print("No mood entries yet. Start tracking to see your history!")
        return
    if not entries:
        print("No entries found for this filter.")
        return

    print(f"=== Mood History ({args.sort}) ===")
    for e in entries[: args.limit]:
        print(_entry_line(e, args.today))


def cmd_chart(args: argparse.Namespace) -> None:
    session = _build_session(args)
    layout = ChartLayout(width=args.width, height=args.height)
    geometry = session.chart(args.period, layout)

    if args.svg:
        out_path = Path(args.svg).expanduser().resolve()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(to_svg(geometry, layout), encoding="utf-8")
        print(f"🖼️ Wrote {args.period} chart → {out_path}")

    if geometry.empty:
        print("No mood data for this period.")
        return

    print(f"=== Mood Chart ({args.period}) ===")
    print(f"- sparkline: {_sparkline([s.point.value if s.point else NO_DATA for s in geometry.slots])}")
    for slot in geometry.slots:
        if slot.point is None:
            print(f"- {slot.label:>11}: no data")
        else:
            print(f"- {slot.label:>11}: {slot.point.value:.1f}/10 @ ({slot.point.x:.1f}, {slot.point.y:.1f})")


def main(argv=None) -> None:
    p = argparse.ArgumentParser(prog="mk", description="Moodkeeper mood journal")
    p.add_argument("--data", default=None, help="Path to an entries JSON file to import (overrides env)")
    p.add_argument("--today", default=None, help="Treat this YYYY-MM-DD as today (default: local date)")
    p.add_argument("--log-level", dest="log_level", default=None, help="DEBUG, INFO, WARNING, ERROR")

    sub = p.add_subparsers(dest="cmd", required=True)
    today = sub.add_parser("today", help="Show today's entry")
    today.add_argument("--json", action="store_true", help="Print the entry as JSON")
    today.set_defaults(func=cmd_today)
    sub.add_parser("stats", help="Averages, streak and attribute breakdown").set_defaults(func=cmd_stats)

    history = sub.add_parser("history", help="Filtered, sorted mood history")
    history.add_argument("--range", choices=[r.value for r in DateRange], default="all")
    history.add_argument("--mood", choices=[m.value for m in MoodFilter], default="any",
                         help="good = 7+, tough = 4 or less")
    history.add_argument("--search", default=None, help="Case-insensitive search in notes")
    history.add_argument("--sort", choices=[s.value for s in SortOrder], default="newest")
    history.add_argument("--limit", type=int, default=50)
    history.add_argument("--csv", default=None, help="Export the view to this CSV path instead of printing")
    history.set_defaults(func=cmd_history)

    chart = sub.add_parser("chart", help="Mood chart for the last days/weeks/months")
    chart.add_argument("--period", choices=[pd.value for pd in Period], default="daily")
    chart.add_argument("--width", type=float, default=800)
    chart.add_argument("--height", type=float, default=300)
    chart.add_argument("--svg", default=None, help="Also write the chart as SVG to this path")
    chart.set_defaults(func=cmd_chart)

    args = p.parse_args(argv)
    setup_logging(args.log_level)

    if args.today is None:
        args.today = today_key()
    elif not is_day_key(args.today):
        raise SystemExit(f"--today must be YYYY-MM-DD (got {args.today!r})")
    else:
        args.today = parse_day_key(args.today).isoformat()

    args.data_path = resolve_data_path(args.data)

    try:
        args.func(args)
    except MoodkeeperError as e:
        raise SystemExit(str(e)) from e


if __name__ == "__main__":
    main()
