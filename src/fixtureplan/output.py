"""Output formatters for fixtureplan."""

import csv
from io import StringIO
from pathlib import Path

from fixtureplan.models import Fixture, StandingRow
from fixtureplan.scheduler import fixtures_by_round

FIXTURE_CSV_HEADER = ["Round", "Match", "Date", "Time", "Home", "Away"]


def format_schedule(fixtures: list[Fixture], title: str = "") -> str:
    """Format schedule as human-readable text, organized by round."""
    lines = []
    lines.append("=" * 72)
    lines.append(f"{title.upper()} SCHEDULE" if title else "SCHEDULE")
    lines.append("=" * 72)

    width = max([len(f.home_team_id) for f in fixtures] + [6])

    for rnd, round_fixtures in fixtures_by_round(fixtures).items():
        lines.append(f"\n--- ROUND {rnd} ---")
        current_day = None
        for f in round_fixtures:
            day = f.scheduled_at.date()
            if day != current_day:
                lines.append(f"\n  {day.strftime('%A %m/%d/%Y')}")
                current_day = day
            lines.append(
                f"    {f.match_number:>2}. {f.scheduled_at:%H:%M}  "
                f"{f.home_team_id:<{width}} vs {f.away_team_id}"
            )

    lines.append("\n" + "=" * 72)
    lines.append("PER-TEAM SCHEDULES")
    lines.append("=" * 72)

    team_ids = {t for f in fixtures for t in (f.home_team_id, f.away_team_id)}

    for team_id in sorted(team_ids):
        team_fixtures = sorted((f for f in fixtures if f.involves(team_id)),
                               key=lambda f: f.scheduled_at)
        lines.append(f"\n{team_id}:")
        for i, f in enumerate(team_fixtures, 1):
            h_a = "H" if f.home_team_id == team_id else "A"
            lines.append(
                f"  {i:>2}. R{f.round:<2} {f.scheduled_at:%a %m/%d %H:%M} "
                f"{h_a} vs {f.opponent(team_id)}"
            )

    return "\n".join(lines)


def format_fixtures_csv(fixtures: list[Fixture]) -> str:
    """Format fixtures as CSV, one row per match in (round, match) order."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(FIXTURE_CSV_HEADER)
    for f in sorted(fixtures, key=lambda x: (x.round, x.match_number)):
        writer.writerow([
            f.round, f.match_number,
            f.scheduled_at.strftime("%Y-%m-%d"),
            f.scheduled_at.strftime("%H:%M"),
            f.home_team_id, f.away_team_id,
        ])
    return output.getvalue()


def format_standings_csv(rows: list[StandingRow]) -> str:
    """Format standings as CSV in table order."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(["Position", "Team", "Played", "Won", "Drawn", "Lost",
                     "GoalsFor", "GoalsAgainst", "GoalDifference", "Points"])
    for r in rows:
        writer.writerow([r.position, r.team_id, r.played, r.won, r.drawn,
                         r.lost, r.goals_for, r.goals_against,
                         r.goal_difference, r.points])
    return output.getvalue()


def write_schedule(fixtures: list[Fixture], output_prefix: str = "output",
                   title: str = ""):
    """Write schedule files into {output_prefix}/ directory."""
    out_dir = Path(output_prefix)
    out_dir.mkdir(parents=True, exist_ok=True)

    schedule_path = out_dir / "schedule.txt"
    schedule_path.write_text(format_schedule(fixtures, title=title))
    print(f"Written: {schedule_path}")

    csv_path = out_dir / "fixtures.csv"
    csv_path.write_text(format_fixtures_csv(fixtures))
    print(f"Written: {csv_path}")


def write_standings(rows: list[StandingRow], output_prefix: str = "output"):
    """Write standings.csv into {output_prefix}/ directory."""
    out_dir = Path(output_prefix)
    out_dir.mkdir(parents=True, exist_ok=True)

    path = out_dir / "standings.csv"
    path.write_text(format_standings_csv(rows))
    print(f"Written: {path}")
