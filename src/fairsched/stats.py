"""Fairness statistics and reporting for the fairsched scheduler."""

from collections import defaultdict

from fairsched.models import FairnessAnalysis, Match, TeamFairnessStats


def analyze_fairness(matches: list[Match]) -> FairnessAnalysis:
    """Compute per-team rest/field/home-away figures for a match list.

    Read-only: the matches are not modified. Teams with fewer than two
    matches have no rest and report zeros for the rest figures.
    """
    team_slots: dict[str, list[int]] = defaultdict(list)
    team_fields: dict[str, dict[int, int]] = defaultdict(lambda: defaultdict(int))
    home_counts: dict[str, int] = defaultdict(int)
    away_counts: dict[str, int] = defaultdict(int)

    for m in matches:
        for t in m.teams:
            team_slots[t].append(m.slot)
            team_fields[t][m.field] += 1
        home_counts[m.home_team] += 1
        away_counts[m.away_team] += 1

    team_stats: dict[str, TeamFairnessStats] = {}
    for t in sorted(team_slots):
        slots = sorted(team_slots[t])
        rests = [b - a for a, b in zip(slots, slots[1:])]
        if rests:
            avg = sum(rests) / len(rests)
            variance = sum((r - avg) ** 2 for r in rests) / len(rests)
        else:
            avg = 0.0
            variance = 0.0
        team_stats[t] = TeamFairnessStats(
            team_id=t,
            match_slots=slots,
            rests_in_slots=rests,
            min_rest=min(rests, default=0),
            max_rest=max(rests, default=0),
            avg_rest=avg,
            rest_variance=variance,
            field_distribution=dict(sorted(team_fields[t].items())),
            home_count=home_counts[t],
            away_count=away_counts[t],
        )

    analysis = FairnessAnalysis(team_stats=team_stats)
    rested = [s for s in team_stats.values() if s.rests_in_slots]
    if rested:
        averages = [s.avg_rest for s in rested]
        analysis.rest_spread = max(averages) - min(averages)
        analysis.min_rest_all_teams = min(s.min_rest for s in rested)
        analysis.max_rest_all_teams = max(s.max_rest for s in rested)

    if team_stats:
        all_avgs = [s.avg_rest for s in team_stats.values()]
        mean = sum(all_avgs) / len(all_avgs)
        analysis.avg_rest_all_teams = mean
        analysis.total_variance = (
            sum((a - mean) ** 2 for a in all_avgs) / len(all_avgs)
        )
    return analysis


def format_fairness_report(analysis: FairnessAnalysis,
                           slot_minutes: int | None = None) -> str:
    """Format fairness statistics into a human-readable report.

    With `slot_minutes` the average rest is also shown in minutes.
    """
    lines = []
    lines.append("=" * 70)
    lines.append("FAIRNESS STATISTICS")
    lines.append("=" * 70)

    stats = analysis.team_stats
    fields = sorted({f for s in stats.values() for f in s.field_distribution})

    lines.append("\n--- REST (in slots) ---")
    header = (f"{'Team':<14} {'Games':>5} {'Min':>4} {'Max':>4} "
              f"{'Avg':>6} {'Var':>6}")
    if slot_minutes:
        header += f" {'AvgMin':>7}"
    lines.append(header)
    lines.append("-" * len(header))
    for t, s in stats.items():
        row = (f"{t:<14} {len(s.match_slots):>5} {s.min_rest:>4} "
               f"{s.max_rest:>4} {s.avg_rest:>6.2f} {s.rest_variance:>6.2f}")
        if slot_minutes:
            row += f" {s.avg_rest * slot_minutes:>7.1f}"
        lines.append(row)

    lines.append("\n--- HOME/AWAY AND FIELDS ---")
    header = f"{'Team':<14} {'Home':>5} {'Away':>5} {'Diff':>5} "
    header += " ".join(f"{'F' + str(f):>4}" for f in fields)
    lines.append(header)
    lines.append("-" * len(header))
    for t, s in stats.items():
        diff = s.home_count - s.away_count
        flag = " ***" if abs(diff) > 1 else ""
        row = f"{t:<14} {s.home_count:>5} {s.away_count:>5} {diff:>+5} "
        row += " ".join(f"{s.field_distribution.get(f, 0):>4}" for f in fields)
        lines.append(row + flag)

    lines.append("\n--- GLOBAL ---")
    lines.append(f"  Rest spread (max avg - min avg): {analysis.rest_spread:.2f} slots")
    lines.append(f"  Shortest rest: {analysis.min_rest_all_teams} slots")
    lines.append(f"  Longest rest:  {analysis.max_rest_all_teams} slots")
    lines.append(f"  Mean of team average rests: {analysis.avg_rest_all_teams:.2f} slots")
    lines.append(f"  Variance of team average rests: {analysis.total_variance:.3f}")

    return "\n".join(lines)
