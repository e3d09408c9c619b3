"""Round-robin pairing generation for fixtureplan."""

from typing import Optional

from fixtureplan.errors import ValidationError
from fixtureplan.models import Pairing, Round


def check_team_ids(team_ids: list[str]) -> list[str]:
    """Return team_ids as a list, rejecting short or duplicated lists."""
    teams = list(team_ids)
    if len(teams) < 2:
        raise ValidationError("at least 2 teams required")
    seen = set()
    for t in teams:
        if t in seen:
            raise ValidationError(f"team {t!r} listed more than once")
        seen.add(t)
    return teams


def rotation_for_round(slots: list[Optional[str]], round_number: int) -> list[Optional[str]]:
    """Circle-method line-up for a 1-based round.

    Slot 0 stays put; slots 1..T-1 are turned round_number - 1 steps,
    so slot i holds original slot 1 + ((i - 1 + round_number - 1) mod (T - 1)).
    """
    t = len(slots)
    shift = round_number - 1
    return [slots[0]] + [
        slots[1 + (i - 1 + shift) % (t - 1)] for i in range(1, t)
    ]


def generate_round_robin(team_ids: list[str]) -> list[Round]:
    """Generate a single round-robin using the circle method.

    For N teams: N-1 rounds of N/2 pairings if N is even. If N is odd an
    empty slot is added, giving N rounds of (N-1)/2 pairings, and whoever
    draws the empty slot rests (Round.bye_team). Deterministic: the same
    team order always gives the same rounds.
    """
    teams = check_team_ids(team_ids)

    slots: list[Optional[str]] = list(teams)
    if len(slots) % 2 == 1:
        slots.append(None)
    t = len(slots)

    rounds = []
    for r in range(1, t):
        line_up = rotation_for_round(slots, r)
        pairings = []
        bye_team = None
        for i in range(t // 2):
            home = line_up[i]
            away = line_up[t - 1 - i]
            if home is None:
                bye_team = away
            elif away is None:
                bye_team = home
            else:
                pairings.append(Pairing(home, away))
        rounds.append(Round(number=r, pairings=pairings, bye_team=bye_team))

    return rounds


def verify_round_robin(rounds: list[Round], teams: list[str]) -> dict:
    """Verify a round-robin schedule is valid and complete.

    Returns dict with:
    - valid: bool
    - errors: list of error strings
    - matchup_counts: dict of (team_a, team_b) -> count
    - games_per_team: dict of team -> game count
    - byes_per_team: dict of team -> bye count
    """
    errors = []
    matchup_counts: dict[tuple[str, str], int] = {}
    games_per_team: dict[str, int] = {t: 0 for t in teams}
    byes_per_team: dict[str, int] = {t: 0 for t in teams}

    for rnd in rounds:
        teams_in_round = set()
        for p in rnd.pairings:
            if p.home == p.away:
                errors.append(f"Round {rnd.number}: {p.home} plays itself")
            for side in (p.home, p.away):
                if side in teams_in_round:
                    errors.append(f"Round {rnd.number}: {side} appears twice")
                teams_in_round.add(side)

            key = tuple(sorted([p.home, p.away]))
            matchup_counts[key] = matchup_counts.get(key, 0) + 1
            games_per_team[p.home] = games_per_team.get(p.home, 0) + 1
            games_per_team[p.away] = games_per_team.get(p.away, 0) + 1

        if rnd.bye_team is not None:
            if any(p.involves(rnd.bye_team) for p in rnd.pairings):
                errors.append(
                    f"Round {rnd.number}: {rnd.bye_team} has a bye but also plays"
                )
            byes_per_team[rnd.bye_team] = byes_per_team.get(rnd.bye_team, 0) + 1

    for i, t1 in enumerate(teams):
        for t2 in teams[i + 1:]:
            key = tuple(sorted([t1, t2]))
            count = matchup_counts.get(key, 0)
            if count != 1:
                errors.append(f"{t1} vs {t2}: played {count} times (expected 1)")

    if len(teams) % 2 == 1:
        for t in teams:
            if byes_per_team.get(t, 0) != 1:
                errors.append(
                    f"{t}: {byes_per_team.get(t, 0)} byes (expected 1)"
                )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "matchup_counts": matchup_counts,
        "games_per_team": games_per_team,
        "byes_per_team": byes_per_team,
    }
