"""Output formatters for the fairsched scheduler.

Slot indices only become clock times here: slot `s` starts at
start_time + s * (slot duration + break).
"""

import csv
from datetime import datetime, time, timedelta
from io import StringIO
from pathlib import Path

from fairsched.config import TournamentConfig
from fairsched.models import Match, ScheduleResult

CSV_HEADER = ["Match", "Slot", "Start", "End", "Field", "Group", "Home", "Away"]


def slot_start(config: TournamentConfig, slot: int) -> time:
    """Kickoff time of a slot."""
    base = datetime.combine(datetime.min.date(), config.start_time)
    return (base + timedelta(minutes=slot * config.slot_minutes)).time()


def slot_end(config: TournamentConfig, slot: int) -> time:
    """Final whistle of a slot (break not included)."""
    base = datetime.combine(datetime.min.date(), config.start_time)
    offset = slot * config.slot_minutes + config.slot_duration_minutes
    return (base + timedelta(minutes=offset)).time()


def estimated_duration_minutes(result: ScheduleResult,
                               config: TournamentConfig) -> int:
    """Minutes from the first kickoff to the end of the last slot's break."""
    return result.slots_used * config.slot_minutes


def _fmt_time(t: time) -> str:
    return f"{t.hour}:{t.minute:02d}"


def format_schedule(result: ScheduleResult, config: TournamentConfig) -> str:
    """Format schedule as human-readable text, organized by slot."""
    lines = []
    lines.append("=" * 70)
    lines.append((config.name or "TOURNAMENT").upper() + " SCHEDULE")
    lines.append("=" * 70)
    if result.slots_used:
        first = _fmt_time(slot_start(config, 0))
        last = _fmt_time(slot_end(config, result.slots_used - 1))
        lines.append(
            f"{len(result.matches)} matches in {result.slots_used} slots, "
            f"{first}-{last} "
            f"(~{estimated_duration_minutes(result, config)} min)"
        )

    by_slot: dict[int, list[Match]] = {}
    for m in result.matches:
        by_slot.setdefault(m.slot, []).append(m)

    for slot in range(result.slots_used):
        start = _fmt_time(slot_start(config, slot))
        lines.append(f"\n--- SLOT {slot + 1} ({start}) ---")
        slot_matches = sorted(by_slot.get(slot, []), key=lambda m: m.field)
        if not slot_matches:
            lines.append("    (no matches)")
        for m in slot_matches:
            group = f"[{m.group}] " if m.group is not None else ""
            lines.append(
                f"    Field {m.field}: {group}{m.home_team} vs {m.away_team}"
            )

    if result.unscheduled:
        lines.append(f"\n{'=' * 70}")
        lines.append(f"UNSCHEDULED PAIRINGS ({len(result.unscheduled)})")
        lines.append("=" * 70)
        for p in result.unscheduled:
            lines.append(f"  {p}")

    # Per-team schedule
    lines.append("\n" + "=" * 70)
    lines.append("PER-TEAM SCHEDULES")
    lines.append("=" * 70)

    by_team: dict[str, list[Match]] = {t: [] for t in config.team_ids}
    for m in result.matches:
        for t in m.teams:
            by_team.setdefault(t, []).append(m)

    for team_id, team_matches in by_team.items():
        lines.append(f"\n{team_id}:")
        for i, m in enumerate(sorted(team_matches, key=lambda m: m.slot), 1):
            is_home = m.home_team == team_id
            opponent = m.away_team if is_home else m.home_team
            h_a = "H" if is_home else "A"
            start = _fmt_time(slot_start(config, m.slot))
            lines.append(
                f"  {i:>2}. {start:>5} {h_a} vs {opponent:<14} field {m.field}"
            )
        for p in result.unscheduled:
            if p.involves(team_id):
                lines.append(f"      UNSCHEDULED vs {p.opponent(team_id)}")

    return "\n".join(lines)


def format_schedule_csv(result: ScheduleResult, config: TournamentConfig) -> str:
    """Format schedule as CSV, one row per match in (slot, field) order."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)

    ordered = sorted(result.matches, key=lambda m: (m.slot, m.field))
    for i, m in enumerate(ordered, 1):
        writer.writerow([
            i, m.slot + 1,
            _fmt_time(slot_start(config, m.slot)),
            _fmt_time(slot_end(config, m.slot)),
            m.field, m.group or "", m.home_team, m.away_team,
        ])

    return output.getvalue()


def write_schedule(result: ScheduleResult, config: TournamentConfig,
                   output_prefix: str = "output") -> None:
    """Write all output files into {output_prefix}/ directory."""
    out_dir = Path(output_prefix)
    out_dir.mkdir(parents=True, exist_ok=True)

    schedule_path = out_dir / "schedule.txt"
    schedule_path.write_text(format_schedule(result, config))
    print(f"Written: {schedule_path}")

    csv_path = out_dir / "schedule.csv"
    csv_path.write_text(format_schedule_csv(result, config))
    print(f"Written: {csv_path}")
