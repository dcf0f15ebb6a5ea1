#!/usr/bin/env python3
"""Fair round-robin tournament scheduler.

Generate mode (default):
    fairsched [config.yaml] [-o DIR] [--trace]

    Schedules every group's round robin onto slots and fields and writes:
      {DIR}/schedule.txt  - Human-readable slot-by-slot + per-team schedule
      {DIR}/schedule.csv  - One row per match, reloadable with --verify
      {DIR}/stats.txt     - Validation report + fairness statistics

Verify mode:
    fairsched --verify <schedule.csv> [config.yaml]

    Re-imports a schedule CSV and checks all constraints against config.
    Exit code 0 if valid, 1 if violations found.

Examples:
    fairsched                         # default config.yaml, output/
    fairsched cup.yaml -o cup2026     # alternate config and output dir
    fairsched --verify output/schedule.csv
"""

import argparse
import sys
from pathlib import Path

from fairsched.config import ConfigError, load_config
from fairsched.constraints import validate_schedule, format_validation_report
from fairsched.output import slot_start, write_schedule
from fairsched.roundrobin import generate_group_pairings
from fairsched.scheduler import schedule
from fairsched.stats import analyze_fairness, format_fairness_report
from fairsched.verify import run_verify


def main():
    parser = argparse.ArgumentParser(
        description="Fair round-robin tournament scheduler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Output files (generate mode):
  {prefix}/schedule.txt   Human-readable schedule (slot view + per-team)
  {prefix}/schedule.csv   Match list CSV
  {prefix}/stats.txt      Validation report + fairness statistics

Exit codes:
  0  Schedule complete and valid
  1  Unscheduled pairings, constraint violations, or config error
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument(
        "--output-prefix", "-o", default="output",
        help="Output directory for generated files (default: output/)"
    )
    parser.add_argument(
        "--verify", metavar="CSV",
        help="Verify an existing schedule CSV instead of generating"
    )
    parser.add_argument(
        "--trace", action="store_true",
        help="Print every placement decision as it is made"
    )
    args = parser.parse_args()

    if args.verify:
        sys.exit(run_verify(args.verify, args.config))

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    print(f"Loading config from {config_path}...")
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print("Config validation errors:")
        for err in e.errors:
            print(f"  {err}")
        sys.exit(1)

    on_commit = None
    if args.trace:
        def on_commit(match, score):
            start = slot_start(config, match.slot).strftime("%H:%M")
            print(f"    slot {match.slot:>3} ({start}) field {match.field}: "
                  f"{match.home_team} vs {match.away_team}  score={score:.2f}")

    print("Generating schedule...")
    result = schedule(config, on_commit=on_commit)

    # Validate
    print("\nValidating...")
    validation = validate_schedule(
        result.matches,
        pairings=generate_group_pairings(config.teams),
        min_rest_slots=config.min_rest_slots,
        fields=config.fields,
        unscheduled=result.unscheduled,
    )
    report = format_validation_report(validation)
    print(report)

    stats_text = format_fairness_report(
        analyze_fairness(result.matches), slot_minutes=config.slot_minutes
    )
    print("\n" + stats_text)

    print("\nWriting output files...")
    write_schedule(result, config, output_prefix=args.output_prefix)

    stats_path = Path(args.output_prefix) / "stats.txt"
    stats_path.write_text(report + "\n\n" + stats_text)
    print(f"Written: {stats_path}")

    if validation["valid"] and result.complete:
        print("\nSchedule generated successfully!")
        return

    print(f"\nSchedule has {len(validation['errors'])} constraint violations.")
    print("Review errors above: add fields, lower min_rest_slots, "
          "or raise max_slots.")
    sys.exit(1)


if __name__ == "__main__":
    main()
