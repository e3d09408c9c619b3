"""League orchestration for fixtureplan.

Loads teams and matches from a store, calls the pure scheduler and
standings functions, writes back full replacement sets and publishes
change events. LeagueStore is an in-memory stand-in for the storage
collaborator; publish is any callable taking (channel, event, payload).
"""

from datetime import date
from typing import Callable, Optional

from fixtureplan.errors import PreconditionError, ValidationError
from fixtureplan.models import (
    Fixture, League, LeagueStatus, Match, MatchStatus, ScheduleConfig,
    ScoringRules, StandingRow,
)
from fixtureplan.scheduler import generate_schedule
from fixtureplan.standings import compute_standings

MATCH_STARTED = "match-started"
SCORE_UPDATE = "score-update"
MATCH_COMPLETED = "match-completed"
LEAGUE_UPDATED = "league-updated"
STANDINGS_UPDATED = "standings-updated"

Publisher = Callable[[str, str, dict], None]

_REGISTRATION_STATUSES = (LeagueStatus.DRAFT, LeagueStatus.REGISTRATION_OPEN)


def _no_publish(channel: str, event: str, payload: dict) -> None:
    pass


def match_channel(match_id: str) -> str:
    return f"match-{match_id}"


def league_channel(league_id: str) -> str:
    return f"league-{league_id}"


class LeagueStore:
    """In-memory leagues, matches and standings, keyed by id."""

    def __init__(self):
        self.leagues: dict[str, League] = {}
        self.matches: dict[str, Match] = {}
        self.standings: dict[str, list[StandingRow]] = {}

    def add_league(self, league: League) -> League:
        if league.id in self.leagues:
            raise PreconditionError(f"League {league.id} already exists")
        self.leagues[league.id] = league
        return league

    def get_league(self, league_id: str) -> League:
        league = self.leagues.get(league_id)
        if league is None:
            raise PreconditionError(f"League {league_id} not found")
        return league

    def get_match(self, match_id: str) -> Match:
        match = self.matches.get(match_id)
        if match is None:
            raise PreconditionError(f"Match {match_id} not found")
        return match

    def matches_for(self, league_id: str,
                    status: Optional[MatchStatus] = None) -> list[Match]:
        """League matches in (round, match_number) order."""
        found = [
            m for m in self.matches.values()
            if m.league_id == league_id and (status is None or m.status == status)
        ]
        return sorted(found, key=lambda m: (m.fixture.round, m.fixture.match_number))

    def replace_matches(self, league_id: str, fixtures: list[Fixture]) -> list[Match]:
        self.delete_matches(league_id)
        created = []
        for f in fixtures:
            match = Match(
                id=f"{league_id}-r{f.round}-m{f.match_number}",
                league_id=league_id,
                fixture=f,
            )
            self.matches[match.id] = match
            created.append(match)
        return created

    def delete_matches(self, league_id: str) -> int:
        doomed = [mid for mid, m in self.matches.items() if m.league_id == league_id]
        for mid in doomed:
            del self.matches[mid]
        return len(doomed)

    def replace_standings(self, league_id: str, rows: list[StandingRow]):
        self.standings[league_id] = list(rows)

    def delete_standings(self, league_id: str):
        self.standings.pop(league_id, None)


def create_league(store: LeagueStore, league_id: str, name: str,
                  start_date: date, today: date,
                  scoring: ScoringRules | None = None,
                  max_teams: int = 16) -> League:
    """Create a DRAFT league."""
    if not name:
        raise ValidationError("League name is required")
    if start_date < today:
        raise ValidationError("Start date cannot be in the past")
    return store.add_league(League(
        id=league_id,
        name=name,
        start_date=start_date,
        scoring=scoring or ScoringRules(),
        max_teams=max_teams,
    ))


def open_registration(store: LeagueStore, league_id: str) -> League:
    league = store.get_league(league_id)
    if league.status != LeagueStatus.DRAFT:
        raise PreconditionError(
            f"League {league_id} is {league.status.value}, not DRAFT"
        )
    league.status = LeagueStatus.REGISTRATION_OPEN
    return league


def register_team(store: LeagueStore, league_id: str, team_id: str) -> League:
    league = store.get_league(league_id)
    if league.status not in _REGISTRATION_STATUSES:
        raise PreconditionError(
            f"League {league_id} is not accepting teams ({league.status.value})"
        )
    if team_id in league.teams:
        raise ValidationError(f"Team {team_id} is already registered")
    if len(league.teams) >= league.max_teams:
        raise PreconditionError(
            f"League {league_id} is full ({league.max_teams} teams)"
        )
    league.teams.append(team_id)
    return league


def schedule_league(store: LeagueStore, league_id: str,
                    config: ScheduleConfig, today: date,
                    publish: Publisher = _no_publish) -> list[Fixture]:
    """Generate and store a league's fixtures.

    Refuses to run over an existing schedule; delete it first.
    """
    league = store.get_league(league_id)
    if store.matches_for(league_id):
        raise PreconditionError(
            "Schedule already exists. Delete existing matches first."
        )
    if config.start_date < today:
        raise ValidationError("Start date cannot be in the past")

    fixtures = generate_schedule(league.teams, config)

    store.replace_matches(league_id, fixtures)
    league.status = LeagueStatus.REGISTRATION_CLOSED
    publish(league_channel(league_id), LEAGUE_UPDATED, {
        "leagueId": league_id,
        "status": league.status.value,
        "totalMatches": len(fixtures),
        "totalRounds": max(f.round for f in fixtures),
    })
    return fixtures


def delete_schedule(store: LeagueStore, league_id: str) -> int:
    """Drop a league's matches and standings; returns matches removed."""
    league = store.get_league(league_id)
    if league.status == LeagueStatus.IN_PROGRESS:
        raise PreconditionError(
            "Cannot delete schedule for a league that is in progress"
        )
    removed = store.delete_matches(league_id)
    store.delete_standings(league_id)
    league.status = LeagueStatus.REGISTRATION_OPEN
    return removed


def _check_scores(home_score, away_score):
    for score in (home_score, away_score):
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise ValidationError("Invalid score values")


def _match_payload(match: Match) -> dict:
    return {
        "matchId": match.id,
        "homeScore": match.home_score,
        "awayScore": match.away_score,
        "status": match.status.value,
    }


def start_match(store: LeagueStore, match_id: str,
                publish: Publisher = _no_publish) -> Match:
    match = store.get_match(match_id)
    if match.status != MatchStatus.SCHEDULED:
        raise PreconditionError("Match cannot be started in its current state")
    match.status = MatchStatus.IN_PROGRESS

    league = store.get_league(match.league_id)
    if league.status == LeagueStatus.REGISTRATION_CLOSED:
        league.status = LeagueStatus.IN_PROGRESS

    publish(match_channel(match.id), MATCH_STARTED, _match_payload(match))
    return match


def update_score(store: LeagueStore, match_id: str, home_score: int,
                 away_score: int, publish: Publisher = _no_publish) -> Match:
    """Record a live score for a match in progress."""
    _check_scores(home_score, away_score)
    match = store.get_match(match_id)
    if match.status != MatchStatus.IN_PROGRESS:
        raise PreconditionError("Can only update scores of matches in progress")
    match.home_score = home_score
    match.away_score = away_score
    publish(match_channel(match.id), SCORE_UPDATE, _match_payload(match))
    return match


def refresh_standings(store: LeagueStore, league_id: str) -> list[StandingRow]:
    """Recompute a league's table from all of its completed matches."""
    league = store.get_league(league_id)
    results = [m.result() for m in store.matches_for(league_id, MatchStatus.COMPLETED)]
    rows = compute_standings(league.teams, results, league.scoring)
    store.replace_standings(league_id, rows)
    return rows


def complete_match(store: LeagueStore, match_id: str, home_score: int,
                   away_score: int,
                   publish: Publisher = _no_publish) -> list[StandingRow]:
    """Finish a match, rebuild the table and notify subscribers.

    Returns the new standings.
    """
    _check_scores(home_score, away_score)
    match = store.get_match(match_id)
    if match.status != MatchStatus.IN_PROGRESS:
        raise PreconditionError("Can only complete matches that are in progress")

    match.home_score = home_score
    match.away_score = away_score
    match.status = MatchStatus.COMPLETED

    rows = refresh_standings(store, match.league_id)

    publish(match_channel(match.id), MATCH_COMPLETED, _match_payload(match))
    publish(league_channel(match.league_id), STANDINGS_UPDATED, {
        "leagueId": match.league_id,
        "standings": [r.as_dict() for r in rows],
    })
    return rows
