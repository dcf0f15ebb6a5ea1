"""Main scheduling engine for the fairsched scheduler.

Three phases:
1. Generate round-robin pairings per group (roundrobin.py)
2. Greedy slot placement: slot by slot, field by field, commit the
   candidate whose teams have waited longest, breaking ties by fairness
   score and then by pairing generation order
3. Home/away balancing over the finished match list (homeaway.py)

Core principle: the slot/field placement is never disturbed after it is
made. Home/away is post-processing only.
"""

from typing import Callable, Optional

from fairsched.config import ConfigError, TournamentConfig
from fairsched.homeaway import balance_home_away, total_imbalance
from fairsched.models import Match, Pairing, ScheduleResult
from fairsched.roundrobin import generate_group_pairings
from fairsched.scoring import ILLEGAL, score_candidate
from fairsched.tracker import ScheduleTracker

CommitHook = Callable[[Match, float], None]


def validate_options(team_ids: list[str], fields: int, min_rest_slots: int,
                     max_slots: int | None = None) -> None:
    """Reject configurations that cannot be scheduled at all."""
    errors = []
    if len(team_ids) < 2:
        errors.append(f"Need at least 2 teams, got {len(team_ids)}")
    for t in sorted({t for t in team_ids if team_ids.count(t) > 1}):
        errors.append(f"Team {t} listed more than once")
    if fields < 1:
        errors.append(f"Need at least 1 field, got {fields}")
    if min_rest_slots < 0:
        errors.append(f"min_rest_slots must be >= 0, got {min_rest_slots}")
    if max_slots is not None and max_slots < 1:
        errors.append(f"max_slots must be >= 1, got {max_slots}")
    if errors:
        raise ConfigError(errors)


def default_max_slots(num_pairings: int, min_rest_slots: int) -> int:
    """Slot budget that is always enough to place every pairing.

    After `min_rest_slots` idle slots every team is free again, so the
    greedy loop places at least one pairing per `min_rest_slots + 1` slots.
    """
    return max(1, num_pairings * (min_rest_slots + 1))


def _candidates(remaining: list[tuple[int, Pairing]], slot: int, field: int,
                tracker: ScheduleTracker) -> list[tuple[float, float, int, Pairing]]:
    """Legal candidates for (slot, field) as sortable tuples.

    Sort key: longest wait first (never-played teams count as infinite),
    then lowest score, then generation order.
    """
    candidates = []
    for idx, p in remaining:
        score = score_candidate(p.team_a, p.team_b, slot, field, tracker)
        if score == ILLEGAL:
            continue
        waited = max(tracker.projected_rest(p.team_a, slot),
                     tracker.projected_rest(p.team_b, slot))
        candidates.append((-waited, score, idx, p))
    candidates.sort(key=lambda c: c[:3])
    return candidates


def schedule_pairings(pairings: list[Pairing], team_ids: list[str],
                      fields: int, min_rest_slots: int = 0,
                      max_slots: int | None = None,
                      on_commit: Optional[CommitHook] = None) -> ScheduleResult:
    """Greedily place pairings into (slot, field) cells.

    Iterates slots 0, 1, 2, ... and fields 1..fields. Each field of each
    slot takes the best legal remaining pairing, or stays empty if none is
    legal. Stops once every pairing is placed, or after `max_slots` slots
    with pairings left over, in which case the result lists them as
    unscheduled.

    `on_commit(match, score)` is called for each placed match. Team A of a
    pairing is home until the balancer says otherwise.
    """
    validate_options(team_ids, fields, min_rest_slots, max_slots)
    if max_slots is None:
        max_slots = default_max_slots(len(pairings), min_rest_slots)

    known = set(team_ids)
    for p in pairings:
        if p.team_a not in known or p.team_b not in known:
            raise ConfigError(f"Pairing {p} references an unknown team")

    tracker = ScheduleTracker(team_ids, fields, min_rest_slots)
    remaining: list[tuple[int, Pairing]] = list(enumerate(pairings))
    matches: list[Match] = []

    slot = 0
    while remaining and slot < max_slots:
        for field in range(1, fields + 1):
            if not remaining:
                break
            candidates = _candidates(remaining, slot, field, tracker)
            if not candidates:
                # Nothing legal for this field means nothing for later fields
                break
            _, score, idx, p = candidates[0]

            match = Match(home_team=p.team_a, away_team=p.team_b,
                          slot=slot, field=field, group=p.group)
            tracker.record_match(p.team_a, slot, field, was_home=True)
            tracker.record_match(p.team_b, slot, field, was_home=False)
            matches.append(match)
            remaining = [(i, q) for i, q in remaining if i != idx]

            if on_commit is not None:
                on_commit(match, score)
        slot += 1

    slots_used = max((m.slot for m in matches), default=-1) + 1
    return ScheduleResult(
        matches=matches,
        unscheduled=[p for _, p in remaining],
        slots_used=slots_used,
    )


def schedule(config: TournamentConfig,
             on_commit: Optional[CommitHook] = None) -> ScheduleResult:
    """Run the full pipeline for a tournament config.

    Returns a ScheduleResult whose matches are home/away balanced and
    ordered by slot then field.
    """
    config.validate()

    pairings = generate_group_pairings(config.teams)
    groups = config.groups
    print(f"  Generated {len(pairings)} pairings in {len(groups)} group(s)")

    budget = config.max_slots
    if budget is None:
        budget = default_max_slots(len(pairings), config.min_rest_slots)
    print(f"  Placing on {config.fields} field(s), "
          f"min rest {config.min_rest_slots} slot(s), budget {budget} slots")

    result = schedule_pairings(
        pairings, config.team_ids, config.fields,
        min_rest_slots=config.min_rest_slots,
        max_slots=budget,
        on_commit=on_commit,
    )
    print(f"  Scheduled {len(result.matches)} matches in "
          f"{result.slots_used} slots")

    before = total_imbalance(result.matches)
    result.matches = balance_home_away(result.matches)
    after = total_imbalance(result.matches)
    print(f"  Home/away imbalance: {before} before balancing, {after} after")

    if result.unscheduled:
        print(f"  UNSCHEDULED pairings: {len(result.unscheduled)}")
        for p in result.unscheduled:
            print(f"    {p}")
    return result

