"""Tests for output.py — clock times and schedule files."""

from datetime import time

from fairsched.config import TournamentConfig
from fairsched.models import Match, Pairing, ScheduleResult, Team
from fairsched.output import (
    CSV_HEADER, estimated_duration_minutes, format_schedule, format_schedule_csv,
    slot_end, slot_start, write_schedule,
)


def _config():
    return TournamentConfig(
        teams=[Team("A"), Team("B"), Team("C")],
        fields=1, slot_duration_minutes=10, break_minutes=5,
        start_time=time(9, 0), name="Mini Cup",
    )


def _result():
    return ScheduleResult(
        matches=[Match("B", "C", 0, 1), Match("A", "B", 2, 1)],
        unscheduled=[Pairing("A", "C")],
        slots_used=3,
    )


class TestSlotTimes:
    def test_slot_start(self):
        config = _config()
        assert slot_start(config, 0) == time(9, 0)
        assert slot_start(config, 1) == time(9, 15)
        assert slot_start(config, 4) == time(10, 0)

    def test_slot_end_excludes_break(self):
        config = _config()
        assert slot_end(config, 0) == time(9, 10)
        assert slot_end(config, 4) == time(10, 10)


class TestFormatSchedule:
    def test_text(self):
        text = format_schedule(_result(), _config())
        assert "MINI CUP SCHEDULE" in text
        assert "--- SLOT 1 (9:00) ---" in text
        assert "--- SLOT 2 (9:15) ---" in text
        assert "(no matches)" in text
        assert "Field 1: B vs C" in text
        assert "UNSCHEDULED PAIRINGS (1)" in text
        assert "UNSCHEDULED vs C" in text

    def test_duration_line(self):
        text = format_schedule(_result(), _config())
        # 3 slots of 10 min play + 5 min break; last match ends 9:40
        assert "2 matches in 3 slots, 9:00-9:40 (~45 min)" in text

    def test_estimated_duration(self):
        assert estimated_duration_minutes(_result(), _config()) == 45
        assert estimated_duration_minutes(ScheduleResult(), _config()) == 0

    def test_no_duration_line_when_empty(self):
        text = format_schedule(ScheduleResult(), _config())
        assert "matches in" not in text

    def test_csv(self):
        lines = format_schedule_csv(_result(), _config()).splitlines()
        assert lines[0] == ",".join(CSV_HEADER)
        assert lines[1] == "1,1,9:00,9:10,1,,B,C"
        assert lines[2] == "2,3,9:30,9:40,1,,A,B"
        assert len(lines) == 3

    def test_write_schedule(self, tmp_path, capsys):
        out = tmp_path / "out"
        write_schedule(_result(), _config(), output_prefix=str(out))
        assert (out / "schedule.txt").exists()
        assert (out / "schedule.csv").read_text().startswith("Match,Slot")
        assert "Written:" in capsys.readouterr().out
