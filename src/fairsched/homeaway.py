"""Home/away balancing pass over an already time-scheduled match list."""

from collections import defaultdict

from fairsched.models import Match


def home_away_counts(matches: list[Match]) -> dict[str, list[int]]:
    """team -> [home, away] over the given matches."""
    counts: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for m in matches:
        counts[m.home_team][0] += 1
        counts[m.away_team][1] += 1
    return dict(counts)


def total_imbalance(matches: list[Match]) -> int:
    """Sum of |home - away| over all teams."""
    return sum(abs(h - a) for h, a in home_away_counts(matches).values())


def balance_home_away(matches: list[Match]) -> list[Match]:
    """Flip home/away per match where that lowers the two teams' imbalance.

    Single forward pass in (slot, field) order, using season totals that
    are updated as flips are made. A flip only happens when it strictly
    lowers |home - away| summed over both teams, which means neither team
    ends up worse off. Slot and field are never touched.

    Matches are flipped in place; returns them ordered by (slot, field).
    """
    ordered = sorted(matches, key=lambda m: (m.slot, m.field))
    counts: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for m in ordered:
        counts[m.home_team][0] += 1
        counts[m.away_team][1] += 1

    for m in ordered:
        home = counts[m.home_team]
        away = counts[m.away_team]

        current = abs(home[0] - home[1]) + abs(away[0] - away[1])
        swapped = (abs((home[0] - 1) - (home[1] + 1))
                   + abs((away[0] + 1) - (away[1] - 1)))

        if swapped < current:
            m.flip()
            home[0] -= 1
            home[1] += 1
            away[0] += 1
            away[1] -= 1

    return ordered
