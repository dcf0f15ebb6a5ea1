"""Config loading and validation for the fairsched scheduler."""

from dataclasses import dataclass
from datetime import time
from pathlib import Path

import yaml

from fairsched.models import Team
from fairsched.roundrobin import group_teams


class ConfigError(ValueError):
    """Tournament configuration that must be fixed before scheduling."""

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def parse_time(s: str) -> time:
    """Parse time strings like '5:30pm', '10am', '17:00'."""
    s_clean = s.strip().lower()

    is_pm = s_clean.endswith("pm")
    is_am = s_clean.endswith("am")
    if is_pm or is_am:
        s_clean = s_clean[:-2].strip()

    try:
        if ":" in s_clean:
            h_str, m_str = s_clean.split(":", 1)
            h, m = int(h_str), int(m_str)
        else:
            h, m = int(s_clean), 0

        if is_pm and h < 12:
            h += 12
        elif is_am and h == 12:
            h = 0
        return time(h, m)
    except ValueError:
        raise ConfigError(f"Cannot parse time: {s!r}") from None


@dataclass
class TournamentConfig:
    """Everything a scheduling run needs from the tournament setup."""
    teams: list[Team]
    fields: int = 1
    min_rest_slots: int = 0
    slot_duration_minutes: int = 10
    break_minutes: int = 0
    start_time: time = time(9, 0)
    max_slots: int | None = None
    name: str = ""

    @property
    def team_ids(self) -> list[str]:
        return [t.id for t in self.teams]

    @property
    def groups(self) -> dict[str | None, list[str]]:
        return group_teams(self.teams)

    @property
    def slot_minutes(self) -> int:
        """Wall-clock distance between two consecutive slot starts."""
        return self.slot_duration_minutes + self.break_minutes

    def validate(self) -> None:
        """Raise ConfigError listing every problem found."""
        errors = []
        ids = self.team_ids
        if len(ids) < 2:
            errors.append(f"Need at least 2 teams, got {len(ids)}")
        seen = set()
        for t in ids:
            if t in seen:
                errors.append(f"Team {t} listed more than once")
            seen.add(t)
        for group, members in self.groups.items():
            if group is not None and len(members) < 2:
                errors.append(f"Group {group} has fewer than 2 teams")
        if self.fields < 1:
            errors.append(f"Need at least 1 field, got {self.fields}")
        if self.min_rest_slots < 0:
            errors.append(
                f"min_rest_slots must be >= 0, got {self.min_rest_slots}"
            )
        if self.max_slots is not None and self.max_slots < 1:
            errors.append(f"max_slots must be >= 1, got {self.max_slots}")
        if self.slot_duration_minutes <= 0:
            errors.append(
                f"slot_duration_minutes must be > 0, "
                f"got {self.slot_duration_minutes}"
            )
        if self.break_minutes < 0:
            errors.append(f"break_minutes must be >= 0, got {self.break_minutes}")
        if errors:
            raise ConfigError(errors)


def _int_setting(raw: dict, key: str, default, optional: bool = False):
    value = raw.get(key, default)
    if value is None and optional:
        return None
    # bool is an int subclass and floats would be silently truncated
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    return value


def _teams_from_dict(raw: dict) -> list[Team]:
    teams: list[Team] = []
    if "groups" in raw and "teams" in raw:
        raise ConfigError("Use either 'groups' or 'teams', not both")
    if "groups" in raw:
        groups = raw["groups"] or {}
        if not isinstance(groups, dict):
            raise ConfigError("'groups' must map group names to team lists")
        for group, members in groups.items():
            if not isinstance(members or [], list):
                raise ConfigError(f"Group {group} must be a list of teams")
            for t in members or []:
                teams.append(Team(id=str(t), group=str(group)))
    else:
        members = raw.get("teams", []) or []
        if not isinstance(members, list):
            raise ConfigError("'teams' must be a list")
        for t in members:
            teams.append(Team(id=str(t)))
    return teams


def config_from_dict(raw: dict) -> TournamentConfig:
    """Build a validated TournamentConfig from parsed YAML."""
    if not isinstance(raw, dict):
        raise ConfigError("Config must be a mapping")

    settings = raw.get("tournament", {}) or {}
    if not isinstance(settings, dict):
        raise ConfigError("'tournament' must be a mapping of settings")

    teams = _teams_from_dict(raw)

    start = settings.get("start_time", "9:00am")
    if isinstance(start, time):
        start_time = start
    elif isinstance(start, int) and not isinstance(start, bool):
        # YAML 1.1 reads an unquoted 9:00 as sexagesimal minutes
        if not 0 <= start < 24 * 60:
            raise ConfigError(f"Cannot parse time: {start!r}")
        start_time = time(start // 60, start % 60)
    else:
        start_time = parse_time(str(start))

    config = TournamentConfig(
        teams=teams,
        fields=_int_setting(settings, "fields", 1),
        min_rest_slots=_int_setting(settings, "min_rest_slots", 0),
        slot_duration_minutes=_int_setting(settings, "slot_duration_minutes", 10),
        break_minutes=_int_setting(settings, "break_minutes", 0),
        start_time=start_time,
        max_slots=_int_setting(settings, "max_slots", None, optional=True),
        name=str(settings.get("name", "")),
    )
    config.validate()
    return config


def load_config(path: str | Path) -> TournamentConfig:
    """Load and validate a tournament config YAML file."""
    path = Path(path)
    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML: {e}") from None
    return config_from_dict(raw)
