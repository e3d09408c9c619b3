"""League table computation for fixtureplan."""

from fixtureplan.errors import ValidationError
from fixtureplan.models import MatchResult, ScoringRules, StandingRow


def _check_result(result: MatchResult, known: dict[str, StandingRow]):
    h, a = result.home_team_id, result.away_team_id
    if h == a:
        raise ValidationError(f"{h} cannot play itself")
    for t in (h, a):
        if t not in known:
            raise ValidationError(f"Result {h} vs {a}: unknown team {t}")
    for score in (result.home_score, result.away_score):
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise ValidationError(
                f"Result {h} vs {a}: invalid score {score!r}"
            )


def _record(row: StandingRow, scored: int, conceded: int, scoring: ScoringRules):
    row.played += 1
    row.goals_for += scored
    row.goals_against += conceded
    if scored > conceded:
        row.won += 1
        row.points += scoring.points_for_win
    elif scored == conceded:
        row.drawn += 1
        row.points += scoring.points_for_draw
    else:
        row.lost += 1
        row.points += scoring.points_for_loss


def standings_sort_key(row: StandingRow) -> tuple:
    """Points, goal difference, goals scored (all descending), then team id."""
    return (-row.points, -row.goal_difference, -row.goals_for, row.team_id)


def compute_standings(teams, completed_matches, scoring: ScoringRules | None = None) -> list[StandingRow]:
    """Build the league table from completed matches.

    Every team gets a row, including teams that have not played yet.
    Weights are the same for home and away sides. Rows are ranked by
    standings_sort_key and numbered 1..n with no shared positions.

    Raises ValidationError if a result names an unknown team, pairs a team
    with itself, or carries a negative score.
    """
    scoring = scoring or ScoringRules()

    rows: dict[str, StandingRow] = {}
    for t in teams:
        rows.setdefault(t, StandingRow(team_id=t))

    for result in completed_matches:
        _check_result(result, rows)
        _record(rows[result.home_team_id], result.home_score,
                result.away_score, scoring)
        _record(rows[result.away_team_id], result.away_score,
                result.home_score, scoring)

    table = sorted(rows.values(), key=standings_sort_key)
    for position, row in enumerate(table, 1):
        row.position = position
    return table


def format_standings_table(rows: list[StandingRow], title: str = "") -> str:
    """Format standings as a fixed-width league table."""
    lines = []
    lines.append("=" * 64)
    lines.append(title.upper() if title else "LEAGUE TABLE")
    lines.append("=" * 64)

    width = max([len(r.team_id) for r in rows] + [4])
    lines.append(f"{'Pos':>3}  {'Team':<{width}} {'P':>3} {'W':>3} {'D':>3} "
                 f"{'L':>3} {'GF':>4} {'GA':>4} {'GD':>4} {'Pts':>4}")
    lines.append("-" * (width + 42))
    for r in rows:
        lines.append(
            f"{r.position:>3}  {r.team_id:<{width}} {r.played:>3} {r.won:>3} "
            f"{r.drawn:>3} {r.lost:>3} {r.goals_for:>4} {r.goals_against:>4} "
            f"{r.goal_difference:>+4} {r.points:>4}"
        )

    return "\n".join(lines)
