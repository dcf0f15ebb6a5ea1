"""Standalone verifier for fairsched schedules.

Validates a schedule CSV written by `fairsched` against a config.
Usage: fairsched-verify <schedule.csv> [config.yaml]
"""

import csv
import sys
from pathlib import Path

from fairsched.config import ConfigError, TournamentConfig, load_config
from fairsched.constraints import validate_schedule, format_validation_report
from fairsched.models import Match
from fairsched.roundrobin import generate_group_pairings
from fairsched.stats import analyze_fairness, format_fairness_report


def parse_csv_schedule(csv_path: str | Path) -> list[Match]:
    """Parse a schedule CSV back into Match objects.

    The CSV's Slot column is 1-based; Match.slot is 0-based. Raises
    ValueError naming the line of any row whose Slot or Field is not a
    whole number.
    """
    matches = []
    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            home = (row.get("Home") or "").strip()
            away = (row.get("Away") or "").strip()
            if not home or not away:
                continue
            group = (row.get("Group") or "").strip() or None
            try:
                slot = int(row.get("Slot") or "")
                field = int(row.get("Field") or "")
            except ValueError:
                raise ValueError(
                    f"line {reader.line_num}: bad Slot/Field "
                    f"{row.get('Slot')!r}/{row.get('Field')!r}"
                ) from None
            matches.append(Match(
                home_team=home,
                away_team=away,
                slot=slot - 1,
                field=field,
                group=group,
            ))
    return matches


def verify_schedule(matches: list[Match], config: TournamentConfig) -> dict:
    """Check a parsed schedule against the pairings the config implies."""
    return validate_schedule(
        matches,
        pairings=generate_group_pairings(config.teams),
        min_rest_slots=config.min_rest_slots,
        fields=config.fields,
    )


def run_verify(csv_path: str, config_path: str) -> int:
    """Print validation and fairness reports; return the exit code."""
    if not Path(csv_path).exists():
        print(f"Error: {csv_path} not found")
        return 1
    if not Path(config_path).exists():
        print(f"Error: {config_path} not found")
        return 1

    print(f"Loading config from {config_path}...")
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print("Config validation errors:")
        for err in e.errors:
            print(f"  {err}")
        return 1

    print(f"Parsing schedule from {csv_path}...")
    try:
        matches = parse_csv_schedule(csv_path)
    except ValueError as e:
        print(f"Error: cannot parse {csv_path}: {e}")
        return 1
    print(f"Loaded {len(matches)} matches")

    result = verify_schedule(matches, config)
    print(format_validation_report(result))
    print("\n" + format_fairness_report(
        analyze_fairness(matches), slot_minutes=config.slot_minutes
    ))
    return 0 if result["valid"] else 1


def main():
    if len(sys.argv) < 2:
        print("Usage: fairsched-verify <schedule.csv> [config.yaml]")
        print("  Validates a schedule CSV against constraints in config.")
        sys.exit(1)

    csv_path = sys.argv[1]
    config_path = sys.argv[2] if len(sys.argv) > 2 else "config.yaml"
    sys.exit(run_verify(csv_path, config_path))


if __name__ == "__main__":
    main()
