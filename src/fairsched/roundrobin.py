"""Round-robin pairing generation for the fairsched scheduler."""

from fairsched.models import Pairing, Team

_BYE = None


def generate_pairings(teams: list[str], group: str | None = None) -> list[Pairing]:
    """Generate every pairing of a single round robin using the circle method.

    For N teams: N-1 rotations if even; odd N is padded with a bye which
    is dropped from the output. The first team stays fixed while the rest
    rotate around it.

    Returns a flat list of N*(N-1)/2 pairings in generation order. Round
    structure is not kept; the slot scheduler decides when each one plays.
    """
    if len(set(teams)) != len(teams):
        raise ValueError(f"Duplicate team ids in {teams}")

    n = len(teams)
    if n < 2:
        return []

    circle: list[str | None] = list(teams)
    if n % 2 == 1:
        circle.append(_BYE)
        n += 1

    pairings = []
    for _ in range(n - 1):
        for i in range(n // 2):
            t1 = circle[i]
            t2 = circle[n - 1 - i]
            if t1 is _BYE or t2 is _BYE:
                continue
            pairings.append(Pairing(t1, t2, group))

        # Rotate: keep position 0 fixed, shift others
        circle = [circle[0]] + [circle[-1]] + circle[1:-1]

    return pairings


def group_teams(teams: list[Team]) -> dict[str | None, list[str]]:
    """Group team ids by group label, in order of first appearance."""
    groups: dict[str | None, list[str]] = {}
    for team in teams:
        groups.setdefault(team.group, []).append(team.id)
    return groups


def generate_group_pairings(teams: list[Team]) -> list[Pairing]:
    """Generate round-robin pairings independently per group and concatenate.

    Teams without a group label form a single group of their own. No
    pairing ever crosses group boundaries.
    """
    pairings = []
    for group, members in group_teams(teams).items():
        pairings.extend(generate_pairings(members, group))
    return pairings


def verify_pairings(pairings: list[Pairing], teams: list[str]) -> dict:
    """Verify a pairing set is a complete single round robin over `teams`.

    Returns dict with:
    - valid: bool
    - errors: list of error strings
    - matchup_counts: dict of (team_a, team_b) -> count
    - games_per_team: dict of team -> game count
    """
    errors = []
    matchup_counts: dict[tuple[str, str], int] = {}
    games_per_team: dict[str, int] = {t: 0 for t in teams}

    for p in pairings:
        if p.team_a == p.team_b:
            errors.append(f"{p.team_a} paired with itself")
            continue
        matchup_counts[p.key] = matchup_counts.get(p.key, 0) + 1
        games_per_team[p.team_a] = games_per_team.get(p.team_a, 0) + 1
        games_per_team[p.team_b] = games_per_team.get(p.team_b, 0) + 1

    # Check every pair plays exactly once
    for i, t1 in enumerate(teams):
        for t2 in teams[i + 1:]:
            key = tuple(sorted([t1, t2]))
            count = matchup_counts.get(key, 0)
            if count != 1:
                errors.append(f"{t1} vs {t2}: paired {count} times (expected 1)")

    known = set(teams)
    for key in matchup_counts:
        if key[0] not in known or key[1] not in known:
            errors.append(f"{key[0]} vs {key[1]}: unknown team")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "matchup_counts": matchup_counts,
        "games_per_team": games_per_team,
    }
