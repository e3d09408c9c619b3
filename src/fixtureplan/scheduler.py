"""Scheduling engine for fixtureplan.

Two phases:
1. Generate round-robin pairings (roundrobin.py)
2. Placement: lay the pairings onto the calendar in (round, match) order,
   skipping excluded weekdays, capping matches per day and closing each
   day at 22:00

Rounds are not interleaved: all of round 1 is placed, possibly across
several days, before round 2 starts. Nothing here touches storage; callers
persist the returned fixtures as a full replacement set.
"""

from datetime import date, datetime, timedelta

from fixtureplan.models import DAY_CUTOFF, Fixture, Round, ScheduleConfig
from fixtureplan.roundrobin import generate_round_robin


def round_count(num_teams: int) -> int:
    """Rounds in a single round-robin for num_teams teams."""
    return num_teams - 1 if num_teams % 2 == 0 else num_teams


def fixture_count(num_teams: int) -> int:
    """Fixtures in a single round-robin for num_teams teams."""
    return num_teams * (num_teams - 1) // 2


class _Cursor:
    """Next free kickoff: the day, the clock on that day, matches placed so far."""

    def __init__(self, config: ScheduleConfig):
        self.config = config
        self.day = config.start_date
        self.clock = datetime.combine(self.day, config.preferred_start_time)
        self.placed_today = 0

    def next_day(self):
        self.day += timedelta(days=1)
        self.clock = datetime.combine(self.day, self.config.preferred_start_time)
        self.placed_today = 0

    def skip_excluded(self):
        while self.config.is_excluded(self.day):
            self.next_day()

    def take(self) -> datetime:
        """Claim the current kickoff and move the cursor past it."""
        self.skip_excluded()
        if self.placed_today >= self.config.matches_per_day:
            self.next_day()
            self.skip_excluded()

        kickoff = self.clock

        self.clock += timedelta(minutes=self.config.slot_minutes)
        self.placed_today += 1
        # A step past midnight also closes the day
        if self.clock.date() != self.day or self.clock.time() >= DAY_CUTOFF:
            self.next_day()

        return kickoff


def place_fixtures(rounds: list[Round], config: ScheduleConfig) -> list[Fixture]:
    """Assign a kickoff to every pairing, round by round.

    Returns fixtures in (round, match_number) order; scheduled_at never
    decreases along the list.
    """
    cursor = _Cursor(config)
    fixtures = []
    for rnd in sorted(rounds, key=lambda r: r.number):
        for match_number, pairing in enumerate(rnd.pairings, 1):
            fixtures.append(Fixture(
                round=rnd.number,
                match_number=match_number,
                home_team_id=pairing.home,
                away_team_id=pairing.away,
                scheduled_at=cursor.take(),
            ))
    return fixtures


def generate_schedule(team_ids: list[str], config: ScheduleConfig) -> list[Fixture]:
    """Generate a complete placed schedule for a league.

    Raises ValidationError for fewer than 2 teams or duplicate ids.
    """
    rounds = generate_round_robin(team_ids)
    return place_fixtures(rounds, config)


def fixtures_by_round(fixtures: list[Fixture]) -> dict[int, list[Fixture]]:
    """Group fixtures by round, each group in match_number order."""
    by_round: dict[int, list[Fixture]] = {}
    for f in sorted(fixtures, key=lambda x: (x.round, x.match_number)):
        by_round.setdefault(f.round, []).append(f)
    return by_round


def fixtures_by_date(fixtures: list[Fixture]) -> dict[date, list[Fixture]]:
    """Group fixtures by calendar day, each group in kickoff order."""
    by_date: dict[date, list[Fixture]] = {}
    for f in sorted(fixtures, key=lambda x: (x.scheduled_at, x.round, x.match_number)):
        by_date.setdefault(f.scheduled_at.date(), []).append(f)
    return by_date
