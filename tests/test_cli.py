"""CLI: agenda rendering and the ``agenda`` subcommand against a JSON store."""

import pytest

from calview import cli
from calview.config import get_settings
from calview.data import JsonEventStore
from calview.domain import CalendarEvent, DateValue, EventDraft


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda: None)


def _events():
    return [
        CalendarEvent(id="evt_0001", title="Holiday", date=DateValue(2025, 3, 2)),
        CalendarEvent(
            id="evt_0002",
            title="Review",
            date=DateValue(2025, 3, 2),
            calendar="Work",
            start_time="10:00",
            end_time="11:00",
            location="Room 4",
        ),
        CalendarEvent(id="evt_0003", title="Gym", date=DateValue(2025, 3, 5), calendar="Personal", start_time="18:00"),
    ]


def test_render_agenda_groups_by_day():
    lines = cli.render_agenda(_events(), year=2025, month=3)
    assert lines == [
        "April 2025",
        "Wed 02",
        "  all day     Holiday [My Events]",
        "  10:00-11:00 Review [Work] @ Room 4",
        "Sat 05",
        "  18:00       Gym [Personal]",
    ]


def test_render_agenda_filters_calendars():
    lines = cli.render_agenda(_events(), year=2025, month=3, calendars=["Personal"])
    assert lines == ["April 2025", "Sat 05", "  18:00       Gym [Personal]"]


def test_render_agenda_empty_month():
    assert cli.render_agenda([], year=2024, month=1) == ["February 2024", "  No events."]


def test_agenda_command_reads_configured_store(capsys):
    store = JsonEventStore(get_settings().storage.events_file)
    store.save(EventDraft(title="Dentist", date=DateValue(2025, 3, 9), start_time="14:00", calendar="Personal"))
    store.save(EventDraft(title="Elsewhere", date=DateValue(2025, 4, 1)))

    cli.main(["agenda", "--year", "2025", "--month", "4"])

    out = capsys.readouterr().out.splitlines()
    assert out == ["April 2025", "Wed 09", "  14:00       Dentist [Personal]"]


def test_agenda_rejects_month_out_of_range(capsys):
    with pytest.raises(SystemExit):
        cli.main(["agenda", "--month", "13"])
