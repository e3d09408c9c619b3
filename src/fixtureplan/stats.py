"""Statistics and balance reporting for fixtureplan."""

from collections import defaultdict

from fixtureplan.models import DayOfWeek, Fixture


def compute_stats(fixtures: list[Fixture], team_ids: list[str]) -> dict:
    """Compute balance statistics for a schedule.

    Returns dict with all stats needed for reporting.
    """
    all_teams = list(team_ids)

    home_counts = defaultdict(int)
    away_counts = defaultdict(int)
    total_games = defaultdict(int)
    day_counts = defaultdict(lambda: defaultdict(int))  # team -> weekday -> count
    matchup_counts = defaultdict(lambda: defaultdict(int))  # team -> opponent -> count
    fixtures_per_date = defaultdict(int)
    teams_in_round = defaultdict(set)

    for f in fixtures:
        h = f.home_team_id
        a = f.away_team_id

        home_counts[h] += 1
        away_counts[a] += 1
        total_games[h] += 1
        total_games[a] += 1

        dow = DayOfWeek.of(f.scheduled_at.date())
        day_counts[h][dow.name] += 1
        day_counts[a][dow.name] += 1

        matchup_counts[h][a] += 1
        matchup_counts[a][h] += 1

        fixtures_per_date[f.scheduled_at.date()] += 1
        teams_in_round[f.round].update((h, a))

    # A team absent from a round had the bye
    bye_counts = {t: 0 for t in all_teams}
    bye_rounds = defaultdict(list)
    for rnd in sorted(teams_in_round):
        for t in all_teams:
            if t not in teams_in_round[rnd]:
                bye_counts[t] += 1
                bye_rounds[t].append(rnd)

    dates = sorted(fixtures_per_date)
    return {
        "all_teams": all_teams,
        "home_counts": dict(home_counts),
        "away_counts": dict(away_counts),
        "total_games": dict(total_games),
        "day_counts": {k: dict(v) for k, v in day_counts.items()},
        "matchup_counts": {k: dict(v) for k, v in matchup_counts.items()},
        "fixtures_per_date": dict(fixtures_per_date),
        "bye_counts": bye_counts,
        "bye_rounds": dict(bye_rounds),
        "rounds": len(teams_in_round),
        "first_date": dates[0] if dates else None,
        "last_date": dates[-1] if dates else None,
        "match_days": len(dates),
    }


def format_stats_report(stats: dict) -> str:
    """Format statistics into a human-readable report."""
    lines = []
    lines.append("=" * 70)
    lines.append("SCHEDULE STATISTICS")
    lines.append("=" * 70)

    all_teams = stats["all_teams"]
    width = max([len(t) for t in all_teams] + [4])

    if stats["first_date"] is not None:
        lines.append(f"\n{stats['rounds']} rounds over {stats['match_days']} match days, "
                     f"{stats['first_date']} to {stats['last_date']}")

    def _z(v, w=5, plus=False):
        """Format an integer, suppressing zeros to blank."""
        if v == 0:
            return " " * w
        if plus:
            return f"{v:>+{w}}"
        return f"{v:>{w}}"

    lines.append("\n--- HOME/AWAY BALANCE ---")
    lines.append(f"{'Team':<{width}} {'Home':>5} {'Away':>5} {'Total':>5} "
                 f"{'Diff':>5} {'BYE':>3}")
    lines.append("-" * (width + 28))
    for t in all_teams:
        h = stats["home_counts"].get(t, 0)
        a = stats["away_counts"].get(t, 0)
        tot = stats["total_games"].get(t, 0)
        diff = h - a
        bye = stats["bye_counts"].get(t, 0)
        flag = " ***" if abs(diff) > 1 else ""
        lines.append(f"{t:<{width}} {_z(h)} {_z(a)} {_z(tot)} "
                     f"{_z(diff, plus=True)} {_z(bye, 3)}{flag}")

    lines.append("\n--- MATCHUP MATRIX ---")
    header = f"{'':>{width}}"
    for t in all_teams:
        header += f" {t[:5]:>5}"
    lines.append(header)
    lines.append("-" * (width + 6 * len(all_teams)))
    for t1 in all_teams:
        row = f"{t1:>{width}}"
        for t2 in all_teams:
            if t1 == t2:
                row += "     -"
            else:
                c = stats["matchup_counts"].get(t1, {}).get(t2, 0)
                row += f" {c:>5}"
        lines.append(row)

    lines.append("\n--- GAMES PER DAY OF WEEK ---")
    days = [d.name for d in DayOfWeek]
    header = f"{'Team':<{width}}"
    for d in days:
        header += f" {d:>4}"
    lines.append(header)
    lines.append("-" * (width + 5 * len(days)))
    for t in all_teams:
        row = f"{t:<{width}}"
        for d in days:
            c = stats["day_counts"].get(t, {}).get(d, 0)
            row += f" {c:>4}"
        lines.append(row)

    lines.append("\n--- FIXTURES PER DATE ---")
    for d in sorted(stats["fixtures_per_date"]):
        lines.append(f"  {d.strftime('%a %Y-%m-%d')}  {stats['fixtures_per_date'][d]:>3}")

    return "\n".join(lines)
