from __future__ import annotations

import argparse
import logging
from typing import Iterable, List, Optional, Sequence

from .bootstrap import configure_logging
from .config import get_settings
from .core import month_label, today
from .data import JsonEventStore
from .domain import CalendarEvent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calview month calendar.")
    subparsers = parser.add_subparsers(dest="command")

    gui_parser = subparsers.add_parser("gui", help="Launch the desktop month view (default).")
    gui_parser.add_argument("--ephemeral", action="store_true", help="Keep events in memory only.")

    agenda_parser = subparsers.add_parser("agenda", help="Print the events of one month.")
    agenda_parser.add_argument("--year", type=int, default=None)
    agenda_parser.add_argument("--month", type=int, choices=range(1, 13), default=None, metavar="1-12")
    agenda_parser.add_argument(
        "--calendar",
        action="append",
        default=None,
        help="Only include this calendar; repeatable.",
    )

    return parser


def _format_event(event: CalendarEvent) -> str:
    if event.all_day:
        when = "all day"
    elif event.end_time:
        when = f"{event.start_time}-{event.end_time}"
    else:
        when = event.start_time or ""
    line = f"  {when:<11} {event.title} [{event.calendar}]"
    if event.location:
        line += f" @ {event.location}"
    return line


def render_agenda(
    events: Iterable[CalendarEvent],
    *,
    year: int,
    month: int,
    calendars: Optional[Sequence[str]] = None,
) -> List[str]:
    """Format one month of events grouped by day; ``month`` is zero-based."""

    lines = [month_label(year, month)]
    current_day = None
    for event in events:
        if calendars and event.calendar not in calendars:
            continue
        if event.date != current_day:
            current_day = event.date
            lines.append(event.date.to_date().strftime("%a %d"))
        lines.append(_format_event(event))
    if len(lines) == 1:
        lines.append("  No events.")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> None:
    configure_logging()
    logging.getLogger(__name__).info("Calview CLI starting")
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in (None, "gui"):
        from .ui.app import run_gui

        run_gui(ephemeral=getattr(args, "ephemeral", False))
    elif args.command == "agenda":
        current = today()
        year = args.year if args.year is not None else current.year
        month = args.month - 1 if args.month is not None else current.month
        store = JsonEventStore(get_settings().storage.events_file)
        for line in render_agenda(store.events_for_month(year, month), year=year, month=month, calendars=args.calendar):
            print(line)
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()


if __name__ == "__main__":
    main()
