"""Constraint validation for fixtureplan.

Can validate either a freshly generated fixture list or one re-imported
from CSV.
"""

from collections import defaultdict

from fixtureplan.models import DayOfWeek, Fixture, ScheduleConfig
from fixtureplan.scheduler import DAY_CUTOFF, fixtures_by_date


def validate_schedule(fixtures: list[Fixture], team_ids: list[str],
                      config: ScheduleConfig) -> dict:
    """Validate a schedule against the round-robin and calendar rules.

    Returns dict with:
    - valid: bool (True if no hard constraint violations)
    - errors: list of hard constraint violations
    - warnings: list of soft constraint issues
    """
    errors = []
    warnings = []

    teams = set(team_ids)
    matchup_counts: dict[tuple[str, str], int] = defaultdict(int)
    per_round: dict[int, dict[str, int]] = defaultdict(lambda: defaultdict(int))

    ordered = sorted(fixtures, key=lambda f: (f.round, f.match_number))
    previous = None

    for f in ordered:
        h = f.home_team_id
        a = f.away_team_id
        label = f"Round {f.round} match {f.match_number}"

        if h == a:
            errors.append(f"{label}: {h} plays itself")
            continue
        unknown = [t for t in (h, a) if t not in teams]
        if unknown:
            errors.append(f"{label}: unknown team {', '.join(unknown)}")
            continue

        key = (h, a) if h < a else (a, h)
        matchup_counts[key] += 1
        per_round[f.round][h] += 1
        per_round[f.round][a] += 1

        kickoff = f.scheduled_at
        if previous is not None and kickoff < previous.scheduled_at:
            errors.append(
                f"{label} at {kickoff:%Y-%m-%d %H:%M} is earlier than round "
                f"{previous.round} match {previous.match_number} "
                f"({previous.scheduled_at:%Y-%m-%d %H:%M})"
            )
        previous = f

        dow = DayOfWeek.of(kickoff.date())
        if dow in config.exclude_days:
            errors.append(
                f"{label} ({h} vs {a}) on excluded day {dow.name} "
                f"{kickoff.date()}"
            )
        if kickoff.time() >= DAY_CUTOFF:
            errors.append(
                f"{label} ({h} vs {a}) kicks off at {kickoff:%H:%M}, "
                f"after the {DAY_CUTOFF:%H:%M} cutoff"
            )
        elif kickoff.time() < config.preferred_start_time:
            warnings.append(
                f"{label} ({h} vs {a}) kicks off at {kickoff:%H:%M}, "
                f"before the {config.preferred_start_time:%H:%M} start"
            )
        if kickoff.date() < config.start_date:
            errors.append(
                f"{label} on {kickoff.date()} is before the season start "
                f"{config.start_date}"
            )

    # No team twice in one round
    for rnd, counts in sorted(per_round.items()):
        for team, count in sorted(counts.items()):
            if count > 1:
                errors.append(f"Round {rnd}: {team} plays {count} times")

    # Daily capacity
    for d, day_fixtures in fixtures_by_date(fixtures).items():
        if len(day_fixtures) > config.matches_per_day:
            errors.append(
                f"{d}: {len(day_fixtures)} matches, max is {config.matches_per_day}"
            )

    # Every pair exactly once
    all_teams = sorted(teams)
    for i, t1 in enumerate(all_teams):
        for t2 in all_teams[i + 1:]:
            count = matchup_counts.get((t1, t2), 0)
            if count == 0:
                errors.append(f"{t1} vs {t2}: never scheduled")
            elif count > 1:
                errors.append(f"{t1} vs {t2}: scheduled {count} times")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def format_validation_report(result: dict) -> str:
    """Format validation results as text."""
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE VALIDATION REPORT")
    lines.append("=" * 60)

    if result["valid"]:
        lines.append("\nRESULT: VALID (no hard constraint violations)")
    else:
        lines.append(f"\nRESULT: INVALID ({len(result['errors'])} violations)")

    if result["errors"]:
        lines.append(f"\n--- ERRORS ({len(result['errors'])}) ---")
        for e in result["errors"]:
            lines.append(f"  ERROR: {e}")

    if result["warnings"]:
        lines.append(f"\n--- WARNINGS ({len(result['warnings'])}) ---")
        for w in result["warnings"]:
            lines.append(f"  WARN: {w}")

    return "\n".join(lines)
