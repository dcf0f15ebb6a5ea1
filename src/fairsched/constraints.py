"""Constraint validation for the fairsched scheduler.

Can validate either an in-memory match list or one re-imported from CSV.
"""

from collections import defaultdict

from fairsched.models import Match, Pairing


def validate_schedule(matches: list[Match],
                      pairings: list[Pairing] | None = None,
                      min_rest_slots: int = 0,
                      fields: int | None = None,
                      unscheduled: list[Pairing] | None = None) -> dict:
    """Validate a schedule against the hard scheduling invariants.

    Returns dict with:
    - valid: bool (True if no hard constraint violations)
    - errors: list of hard constraint violations
    - warnings: list of soft constraint issues
    """
    errors = []
    warnings = []

    for p in unscheduled or []:
        errors.append(f"UNSCHEDULED: {p}")

    team_slot_count: dict[str, dict[int, int]] = defaultdict(lambda: defaultdict(int))
    field_slot: dict[tuple[int, int], list[Match]] = defaultdict(list)
    matchup_counts: dict[tuple[str, str], int] = defaultdict(int)
    team_slots: dict[str, list[int]] = defaultdict(list)
    home_counts: dict[str, int] = defaultdict(int)
    away_counts: dict[str, int] = defaultdict(int)

    for m in matches:
        if m.home_team == m.away_team:
            errors.append(f"Slot {m.slot}: {m.home_team} plays itself")
            continue
        if m.slot < 0:
            errors.append(f"{m.home_team} vs {m.away_team}: negative slot {m.slot}")
        if fields is not None and not 1 <= m.field <= fields:
            errors.append(
                f"Slot {m.slot}: {m.home_team} vs {m.away_team} on field "
                f"{m.field} (only 1-{fields} exist)"
            )

        for t in m.teams:
            team_slot_count[t][m.slot] += 1
            team_slots[t].append(m.slot)
        field_slot[(m.slot, m.field)].append(m)
        matchup_counts[m.key] += 1
        home_counts[m.home_team] += 1
        away_counts[m.away_team] += 1

    # Check: one match per team per slot
    for t in sorted(team_slot_count):
        for slot, count in sorted(team_slot_count[t].items()):
            if count > 1:
                errors.append(f"{t} plays {count} matches in slot {slot}")

    # Check: one match per field per slot
    for (slot, field), booked in sorted(field_slot.items()):
        if len(booked) > 1:
            names = ", ".join(f"{m.home_team}-{m.away_team}" for m in booked)
            errors.append(f"Field {field} double-booked in slot {slot}: {names}")

    # Check: every pairing at most once
    for key, count in sorted(matchup_counts.items()):
        if count > 1:
            errors.append(f"{key[0]} vs {key[1]}: scheduled {count} times")

    # Check: completeness against the generated pairings
    if pairings is not None:
        expected = {p.key for p in pairings}
        left_over = {p.key for p in unscheduled or []}
        for key in sorted(expected - set(matchup_counts) - left_over):
            errors.append(f"{key[0]} vs {key[1]}: missing from schedule")
        for key in sorted(set(matchup_counts) - expected):
            errors.append(f"{key[0]} vs {key[1]}: not a generated pairing")

    # Check: minimum rest between a team's matches
    if min_rest_slots >= 1:
        for t in sorted(team_slots):
            ordered = sorted(team_slots[t])
            for a, b in zip(ordered, ordered[1:]):
                if 0 < b - a <= min_rest_slots:
                    errors.append(
                        f"{t} plays slots {a} and {b}: needs {min_rest_slots} "
                        f"idle slot(s) between matches"
                    )

    for t in sorted(home_counts.keys() | away_counts.keys()):
        diff = home_counts[t] - away_counts[t]
        if abs(diff) > 1:
            warnings.append(
                f"{t}: {home_counts[t]} home / {away_counts[t]} away"
            )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def format_validation_report(result: dict) -> str:
    """Format validation results as text."""
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE VALIDATION REPORT")
    lines.append("=" * 60)

    if result["valid"]:
        lines.append("\nRESULT: VALID (no hard constraint violations)")
    else:
        lines.append(f"\nRESULT: INVALID ({len(result['errors'])} violations)")

    if result["errors"]:
        lines.append(f"\n--- ERRORS ({len(result['errors'])}) ---")
        for e in result["errors"]:
            lines.append(f"  ERROR: {e}")

    if result["warnings"]:
        lines.append(f"\n--- WARNINGS ({len(result['warnings'])}) ---")
        for w in result["warnings"]:
            lines.append(f"  WARN: {w}")

    return "\n".join(lines)
