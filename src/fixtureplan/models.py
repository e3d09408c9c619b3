"""Data models for the fixtureplan league scheduler."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Optional

from fixtureplan.errors import ValidationError


class DayOfWeek(Enum):
    """Weekday index with 0 = Sunday, as league configs number them."""
    Sun = 0
    Mon = 1
    Tue = 2
    Wed = 3
    Thu = 4
    Fri = 5
    Sat = 6

    @classmethod
    def from_str(cls, s: str) -> "DayOfWeek":
        try:
            return cls[s.strip()[:3].capitalize()]
        except KeyError:
            raise ValidationError(f"Unknown weekday: {s!r}") from None

    @classmethod
    def of(cls, d: date) -> "DayOfWeek":
        # date.weekday() counts from Monday
        return cls((d.weekday() + 1) % 7)

    @classmethod
    def coerce(cls, value) -> "DayOfWeek":
        """Accept a DayOfWeek, a 0..6 index or a day name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValidationError(f"Invalid weekday: {value!r}")
        if isinstance(value, int):
            if not 0 <= value <= 6:
                raise ValidationError(
                    f"Weekday index {value} out of range 0..6 (0 = Sunday)"
                )
            return cls(value)
        if isinstance(value, str):
            if value.strip().isdigit():
                return cls.coerce(int(value.strip()))
            return cls.from_str(value)
        raise ValidationError(f"Invalid weekday: {value!r}")


ALL_DAYS = list(DayOfWeek)

# No kickoff at or after this time of day
DAY_CUTOFF = time(22, 0)


class LeagueStatus(Enum):
    DRAFT = "DRAFT"
    REGISTRATION_OPEN = "REGISTRATION_OPEN"
    REGISTRATION_CLOSED = "REGISTRATION_CLOSED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class MatchStatus(Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


@dataclass
class Pairing:
    """Two teams drawn together in a round, home side first."""
    home: str
    away: str

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home, self.away)


@dataclass
class Round:
    """One round-robin round; every team appears at most once."""
    number: int
    pairings: list[Pairing]
    bye_team: Optional[str] = None


@dataclass(frozen=True)
class Fixture:
    """A pairing placed on the calendar."""
    round: int
    match_number: int
    home_team_id: str
    away_team_id: str
    scheduled_at: datetime

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def opponent(self, team_id: str) -> str:
        if team_id == self.home_team_id:
            return self.away_team_id
        return self.home_team_id


@dataclass(frozen=True)
class MatchResult:
    """Final score of a completed match."""
    home_team_id: str
    away_team_id: str
    home_score: int
    away_score: int


@dataclass(frozen=True)
class ScoringRules:
    """League points awarded per result."""
    points_for_win: int = 3
    points_for_draw: int = 1
    points_for_loss: int = 0


@dataclass
class StandingRow:
    """A team's line in the league table."""
    team_id: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0
    position: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def as_dict(self) -> dict:
        return {
            "teamId": self.team_id,
            "position": self.position,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "goalsFor": self.goals_for,
            "goalsAgainst": self.goals_against,
            "goalDifference": self.goal_difference,
            "points": self.points,
        }


@dataclass
class ScheduleConfig:
    """Calendar constraints for placing a league's fixtures.

    Day exclusions use the 0 = Sunday numbering and may be given as
    indices, names or DayOfWeek members. preferred_start_time also
    accepts an "HH:MM" string.
    """
    start_date: date
    match_duration_minutes: int = 90
    break_between_matches: int = 30
    matches_per_day: int = 4
    exclude_days: frozenset = field(
        default_factory=lambda: frozenset({DayOfWeek.Sun})
    )
    preferred_start_time: time = time(10, 0)

    def __post_init__(self):
        # config imports this module
        from fixtureplan.config import parse_date, parse_time

        if isinstance(self.start_date, datetime):
            self.start_date = self.start_date.date()
        elif isinstance(self.start_date, str):
            self.start_date = parse_date(self.start_date)
        elif not isinstance(self.start_date, date):
            raise ValidationError(f"Invalid start date: {self.start_date!r}")

        if isinstance(self.preferred_start_time, str):
            self.preferred_start_time = parse_time(self.preferred_start_time)
        elif not isinstance(self.preferred_start_time, time):
            raise ValidationError(
                f"Invalid start time: {self.preferred_start_time!r}"
            )
        if self.preferred_start_time >= DAY_CUTOFF:
            raise ValidationError(
                f"preferred_start_time {self.preferred_start_time:%H:%M} is not "
                f"before the {DAY_CUTOFF:%H:%M} cutoff"
            )

        self.exclude_days = frozenset(
            DayOfWeek.coerce(d) for d in self.exclude_days
        )

        if self.match_duration_minutes <= 0:
            raise ValidationError("match_duration_minutes must be positive")
        if self.break_between_matches < 0:
            raise ValidationError("break_between_matches cannot be negative")
        if self.matches_per_day <= 0:
            raise ValidationError("matches_per_day must be positive")
        if len(self.exclude_days) == len(ALL_DAYS):
            raise ValidationError("every day of the week is excluded")

    @property
    def slot_minutes(self) -> int:
        """Minutes between consecutive kickoffs on the same day."""
        return self.match_duration_minutes + self.break_between_matches

    def is_excluded(self, d: date) -> bool:
        return DayOfWeek.of(d) in self.exclude_days


@dataclass
class League:
    """A league as held by the storage collaborator."""
    id: str
    name: str
    start_date: date
    scoring: ScoringRules = field(default_factory=ScoringRules)
    status: LeagueStatus = LeagueStatus.DRAFT
    max_teams: int = 16
    teams: list[str] = field(default_factory=list)


@dataclass
class Match:
    """A persisted fixture plus its live state."""
    id: str
    league_id: str
    fixture: Fixture
    status: MatchStatus = MatchStatus.SCHEDULED
    home_score: int = 0
    away_score: int = 0

    @property
    def home_team_id(self) -> str:
        return self.fixture.home_team_id

    @property
    def away_team_id(self) -> str:
        return self.fixture.away_team_id

    def result(self) -> MatchResult:
        return MatchResult(
            home_team_id=self.home_team_id,
            away_team_id=self.away_team_id,
            home_score=self.home_score,
            away_score=self.away_score,
        )
