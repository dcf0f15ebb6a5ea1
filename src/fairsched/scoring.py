"""Fairness scoring of a candidate (pairing, slot, field) placement.

Lower is better. ILLEGAL marks a placement that must not be made.
The weights encode the priority order rest >> field > home/away.
"""

import math

from fairsched.tracker import ScheduleTracker

ILLEGAL = math.inf

REST_WEIGHT = 100
FIELD_WEIGHT = 10
HOME_AWAY_WEIGHT = 5


def rest_spread(tracker: ScheduleTracker,
                extra: dict[str, int] | None = None) -> float:
    """Max minus min average rest across teams that have a rest value.

    `extra` maps team -> slot for hypothetical matches to include.
    Teams with fewer than two matches have no average and are skipped.
    """
    extra = extra or {}
    averages = []
    for team_id in tracker.team_ids:
        if team_id in extra:
            avg = tracker.projected_avg_rest(team_id, extra[team_id])
        else:
            avg = tracker.avg_rest(team_id)
        if avg is not None:
            averages.append(avg)
    if len(averages) < 2:
        return 0.0
    return max(averages) - min(averages)


def _variance(values: list[int]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def field_imbalance(tracker: ScheduleTracker, team_id: str, field: int) -> float:
    """Variance of the team's per-field usage if it also played on `field`."""
    usage = tracker.field_usage(team_id)
    usage[field] = usage.get(field, 0) + 1
    return _variance(list(usage.values()))


def home_away_imbalance(tracker: ScheduleTracker, home: str, away: str) -> int:
    """|home - away| summed over both teams with `home` tentatively at home."""
    a = abs(tracker.home_count(home) + 1 - tracker.away_count(home))
    b = abs(tracker.home_count(away) - (tracker.away_count(away) + 1))
    return a + b


def score_candidate(team_a: str, team_b: str, slot: int, field: int,
                    tracker: ScheduleTracker) -> float:
    """Score placing team_a vs team_b in `slot` on `field`.

    Returns ILLEGAL if either team cannot play in the slot. team_a is
    treated as home for scoring; the final orientation is decided later
    by the home/away balancer.
    """
    if not tracker.can_play(team_a, slot) or not tracker.can_play(team_b, slot):
        return ILLEGAL

    score = REST_WEIGHT * rest_spread(tracker, {team_a: slot, team_b: slot})
    score += FIELD_WEIGHT * (field_imbalance(tracker, team_a, field)
                             + field_imbalance(tracker, team_b, field))
    score += HOME_AWAY_WEIGHT * home_away_imbalance(tracker, team_a, team_b)
    return score
