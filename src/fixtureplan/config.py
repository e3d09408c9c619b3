"""Config loading and validation for fixtureplan."""

import csv
import re
from datetime import date, datetime, time
from pathlib import Path

import yaml

from fixtureplan.errors import ValidationError
from fixtureplan.models import DayOfWeek, MatchResult, ScheduleConfig, ScoringRules

_TIME_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$")
_SCORE_RE = re.compile(r"^\s*(\d+)\s*[-:]\s*(\d+)\s*$")


def parse_time(s: str) -> time:
    """Parse time strings like '17:00', '09:30', '5:30pm', '10am'."""
    m = _TIME_RE.match(str(s).strip().lower())
    if not m:
        raise ValidationError(f"Cannot parse time: {s!r} (expected HH:MM)")
    h = int(m.group(1))
    minute = int(m.group(2) or 0)
    suffix = m.group(3)

    if suffix == "pm" and h < 12:
        h += 12
    elif suffix == "am" and h == 12:
        h = 0

    if h > 23 or minute > 59:
        raise ValidationError(f"Time out of range: {s!r}")
    return time(h, minute)


def parse_date(s: str) -> date:
    """Parse date string YYYY-MM-DD."""
    try:
        return datetime.strptime(str(s).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(
            f"Cannot parse date: {s!r} (expected YYYY-MM-DD)"
        ) from None


def parse_score(s: str) -> tuple[int, int]:
    """Parse '2-1' or '2:1' into (home, away) goals."""
    m = _SCORE_RE.match(str(s))
    if not m:
        raise ValidationError(f"Cannot parse score: {s!r}")
    return int(m.group(1)), int(m.group(2))


def _as_date(value) -> date:
    # YAML hands back dates already parsed when unquoted
    if isinstance(value, date):
        return value
    return parse_date(value)


def _as_time(value) -> time:
    # YAML 1.1 reads an unquoted 10:00 as the base-60 integer 600
    if isinstance(value, int) and not isinstance(value, bool):
        hours, minutes = divmod(value, 60)
        return parse_time(f"{hours}:{minutes:02d}")
    return parse_time(str(value))


def _as_int(section: dict, key: str, default: int | None, where: str) -> int:
    value = section.get(key, default)
    if isinstance(value, bool):
        raise ValidationError(f"{where}.{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"{where}.{key} must be an integer, got {value!r}"
        ) from None


def _parse_result(entry: dict) -> MatchResult:
    if not isinstance(entry, dict) or "home" not in entry or "away" not in entry:
        raise ValidationError(f"Result {entry!r} needs 'home' and 'away'")
    if "score" in entry:
        home_score, away_score = parse_score(entry["score"])
    else:
        home_score = _as_int(entry, "home_score", None, "results")
        away_score = _as_int(entry, "away_score", None, "results")
    return MatchResult(
        home_team_id=str(entry["home"]),
        away_team_id=str(entry["away"]),
        home_score=home_score,
        away_score=away_score,
    )


def load_results_csv(path: str | Path) -> list[MatchResult]:
    """Read completed matches from a CSV with Home,Away,HomeScore,AwayScore."""
    results = []
    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            home = (row.get("Home") or "").strip()
            away = (row.get("Away") or "").strip()
            if not home or not away:
                continue
            try:
                home_score = int(row["HomeScore"])
                away_score = int(row["AwayScore"])
            except (KeyError, TypeError, ValueError):
                raise ValidationError(
                    f"Bad score in results row {home} vs {away}"
                ) from None
            results.append(MatchResult(home, away, home_score, away_score))
    return results


def load_config(path: str | Path) -> dict:
    """Load and validate config YAML, returning structured data.

    Returns dict with:
    - league: {name, start_date}
    - schedule: ScheduleConfig
    - scoring: ScoringRules
    - teams: list of team ids, in registration order
    - results: list of MatchResult (may be empty)
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict) or "league" not in raw:
        raise ValidationError(f"{path}: missing 'league' section")
    lraw = raw["league"] or {}
    if not isinstance(lraw, dict):
        raise ValidationError(f"{path}: 'league' must be a mapping")
    if "start_date" not in lraw:
        raise ValidationError(f"{path}: league.start_date is required")

    exclude_days = lraw.get("exclude_days", ["Sun"])
    if exclude_days is None:
        exclude_days = []
    if isinstance(exclude_days, (str, int)):
        exclude_days = [exclude_days]

    schedule = ScheduleConfig(
        start_date=_as_date(lraw["start_date"]),
        match_duration_minutes=_as_int(lraw, "match_duration_minutes", 90, "league"),
        break_between_matches=_as_int(lraw, "break_between_matches", 30, "league"),
        matches_per_day=_as_int(lraw, "matches_per_day", 4, "league"),
        exclude_days=frozenset(DayOfWeek.coerce(d) for d in exclude_days),
        preferred_start_time=_as_time(lraw.get("preferred_start_time", "10:00")),
    )

    sraw = raw.get("scoring", {}) or {}
    scoring = ScoringRules(
        points_for_win=_as_int(sraw, "win", 3, "scoring"),
        points_for_draw=_as_int(sraw, "draw", 1, "scoring"),
        points_for_loss=_as_int(sraw, "loss", 0, "scoring"),
    )

    teams_val = raw.get("teams") or []
    if isinstance(teams_val, int):
        # teams: 6 -> T1..T6
        teams = [f"T{i}" for i in range(1, teams_val + 1)]
    else:
        teams = [str(t) for t in teams_val]

    errors = []
    seen = set()
    for t in teams:
        if t in seen:
            errors.append(f"Team {t} listed more than once")
        seen.add(t)

    results = [_parse_result(r) for r in raw.get("results", []) or []]
    for r in results:
        for t in (r.home_team_id, r.away_team_id):
            if t not in seen:
                errors.append(f"Result {r.home_team_id} vs {r.away_team_id}: "
                              f"unknown team {t}")

    if errors:
        raise ValidationError(
            "Config validation errors:\n" + "\n".join(f"  {e}" for e in errors)
        )

    return {
        "league": {
            "name": lraw.get("name", ""),
            "start_date": schedule.start_date,
        },
        "schedule": schedule,
        "scoring": scoring,
        "teams": teams,
        "results": results,
    }
