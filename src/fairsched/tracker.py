"""Per-team rest, field and home/away state for a single scheduling run.

A ScheduleTracker is owned by exactly one run. It is a derived index over
the matches committed so far, never a source of truth of its own.
"""

import math
from bisect import bisect_left, insort
from dataclasses import dataclass, field


@dataclass
class TeamState:
    """What one team has been given so far in the current run."""
    team_id: str
    match_slots: list[int] = field(default_factory=list)  # ascending
    home_count: int = 0
    away_count: int = 0
    field_counts: dict[int, int] = field(default_factory=dict)

    @property
    def matches_played(self) -> int:
        return len(self.match_slots)

    @property
    def last_slot(self) -> int | None:
        return self.match_slots[-1] if self.match_slots else None


def _avg_rest(slots: list[int]) -> float | None:
    # Mean gap of an ascending slot list telescopes to (last - first) / (n - 1)
    if len(slots) < 2:
        return None
    return (slots[-1] - slots[0]) / (len(slots) - 1)


class ScheduleTracker:
    """Answers "can this team play in slot S" and "what would its rest be".

    `min_rest_slots` is the number of idle slots a team must have between
    two of its matches: 0 only forbids playing twice in one slot, 1 forbids
    back-to-back slots, and so on.
    """

    def __init__(self, team_ids: list[str], fields: int, min_rest_slots: int = 0):
        self.fields = fields
        self.min_rest_slots = min_rest_slots
        self._states: dict[str, TeamState] = {
            t: TeamState(team_id=t) for t in team_ids
        }

    @property
    def team_ids(self) -> list[str]:
        return list(self._states)

    def state(self, team_id: str) -> TeamState:
        return self._states[team_id]

    def states(self) -> list[TeamState]:
        return list(self._states.values())

    def can_play(self, team_id: str, slot: int) -> bool:
        """False if the team already plays in `slot` or would rest too little."""
        slots = self._states[team_id].match_slots
        # Nearest recorded slots on either side are the only ones that matter
        i = bisect_left(slots, slot)
        for s in slots[max(0, i - 1):i + 1]:
            if abs(s - slot) <= self.min_rest_slots:
                return False
        return True

    def projected_rest(self, team_id: str, slot: int) -> float:
        """Rest the team would have before a match in `slot`.

        A team with no earlier match has unbounded rest.
        """
        slots = self._states[team_id].match_slots
        i = bisect_left(slots, slot)
        if i == 0:
            return math.inf
        return slot - slots[i - 1]

    def projected_avg_rest(self, team_id: str, slot: int) -> float | None:
        """Average rest the team would have if it also played in `slot`."""
        slots = self._states[team_id].match_slots
        if not slots:
            return None
        first = min(slots[0], slot)
        last = max(slots[-1], slot)
        return (last - first) / len(slots)

    def record_match(self, team_id: str, slot: int, field: int, was_home: bool) -> None:
        """Commit one match for one team. The only mutator."""
        st = self._states[team_id]
        assert slot not in st.match_slots, (
            f"{team_id} already scheduled in slot {slot}"
        )
        insort(st.match_slots, slot)
        st.field_counts[field] = st.field_counts.get(field, 0) + 1
        if was_home:
            st.home_count += 1
        else:
            st.away_count += 1

    def rests(self, team_id: str) -> list[int]:
        slots = self._states[team_id].match_slots
        return [b - a for a, b in zip(slots, slots[1:])]

    def avg_rest(self, team_id: str) -> float | None:
        return _avg_rest(self._states[team_id].match_slots)

    def min_rest(self, team_id: str) -> int | None:
        return min(self.rests(team_id), default=None)

    def max_rest(self, team_id: str) -> int | None:
        return max(self.rests(team_id), default=None)

    def home_count(self, team_id: str) -> int:
        return self._states[team_id].home_count

    def away_count(self, team_id: str) -> int:
        return self._states[team_id].away_count

    def field_usage(self, team_id: str) -> dict[int, int]:
        """Histogram of matches per field, including unused fields."""
        counts = self._states[team_id].field_counts
        return {f: counts.get(f, 0) for f in range(1, self.fields + 1)}
