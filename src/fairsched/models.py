"""Data models for the fairsched tournament scheduler."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Team:
    """A team taking part in the tournament."""
    id: str
    group: Optional[str] = None


@dataclass(frozen=True)
class Pairing:
    """Two teams due to play each other once (no home/away yet)."""
    team_a: str
    team_b: str
    group: Optional[str] = None

    def involves(self, team_id: str) -> bool:
        return team_id in (self.team_a, self.team_b)

    def opponent(self, team_id: str) -> str:
        if team_id == self.team_a:
            return self.team_b
        return self.team_a

    @property
    def key(self) -> tuple[str, str]:
        """Order-independent identity of the pairing."""
        if self.team_a < self.team_b:
            return (self.team_a, self.team_b)
        return (self.team_b, self.team_a)

    def __str__(self) -> str:
        label = f" [{self.group}]" if self.group is not None else ""
        return f"{self.team_a} vs {self.team_b}{label}"


@dataclass
class Match:
    """A pairing placed in a slot on a field, with home/away orientation."""
    home_team: str
    away_team: str
    slot: int   # 0-based
    field: int  # 1-based
    group: Optional[str] = None

    @property
    def teams(self) -> tuple[str, str]:
        return (self.home_team, self.away_team)

    @property
    def key(self) -> tuple[str, str]:
        return Pairing(self.home_team, self.away_team).key

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_team, self.away_team)

    def flip(self) -> None:
        """Swap home and away. Slot and field stay where they are."""
        self.home_team, self.away_team = self.away_team, self.home_team


@dataclass
class ScheduleResult:
    """Outcome of one scheduling run.

    A run is complete only when every generated pairing was placed;
    otherwise `unscheduled` lists the pairings left over.
    """
    matches: list[Match] = field(default_factory=list)
    unscheduled: list[Pairing] = field(default_factory=list)
    slots_used: int = 0

    @property
    def complete(self) -> bool:
        return not self.unscheduled


@dataclass
class TeamFairnessStats:
    """Rest, field and home/away figures for one team."""
    team_id: str
    match_slots: list[int] = field(default_factory=list)
    rests_in_slots: list[int] = field(default_factory=list)
    min_rest: int = 0
    max_rest: int = 0
    avg_rest: float = 0.0
    rest_variance: float = 0.0
    field_distribution: dict[int, int] = field(default_factory=dict)
    home_count: int = 0
    away_count: int = 0

    @property
    def home_away_balance(self) -> int:
        return abs(self.home_count - self.away_count)


@dataclass
class FairnessAnalysis:
    """Per-team stats plus the global rest summary."""
    team_stats: dict[str, TeamFairnessStats] = field(default_factory=dict)
    rest_spread: float = 0.0  # max avg rest - min avg rest
    min_rest_all_teams: int = 0
    max_rest_all_teams: int = 0
    avg_rest_all_teams: float = 0.0
    total_variance: float = 0.0
