"""Standalone verifier for fixtureplan.

Validates a fixtures CSV (as written by fixtureplan) against a config.
Usage: fixtureplan-verify <fixtures.csv> [config.yaml]
"""

import csv
import sys
from datetime import datetime
from pathlib import Path

from fixtureplan.config import load_config
from fixtureplan.constraints import validate_schedule, format_validation_report
from fixtureplan.errors import ValidationError
from fixtureplan.models import Fixture
from fixtureplan.stats import compute_stats, format_stats_report


def parse_fixtures_csv(csv_path: str | Path) -> list[Fixture]:
    """Parse a fixtures CSV (Round,Match,Date,Time,Home,Away) back into Fixtures."""
    fixtures = []
    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, 2):
            home = (row.get("Home") or "").strip()
            away = (row.get("Away") or "").strip()
            if not home or not away:
                continue
            try:
                kickoff = datetime.strptime(
                    f"{row['Date'].strip()} {row['Time'].strip()}",
                    "%Y-%m-%d %H:%M",
                )
                fixtures.append(Fixture(
                    round=int(row["Round"]),
                    match_number=int(row["Match"]),
                    home_team_id=home,
                    away_team_id=away,
                    scheduled_at=kickoff,
                ))
            except (KeyError, AttributeError, ValueError) as e:
                raise ValidationError(f"{csv_path} line {line_no}: {e}") from None
    return fixtures


def main():
    if len(sys.argv) < 2:
        print("Usage: fixtureplan-verify <fixtures.csv> [config.yaml]")
        print("  Validates a fixtures CSV against the rules in config.")
        sys.exit(1)

    csv_path = sys.argv[1]
    config_path = sys.argv[2] if len(sys.argv) > 2 else "config.yaml"

    if not Path(csv_path).exists():
        print(f"Error: {csv_path} not found")
        sys.exit(1)
    if not Path(config_path).exists():
        print(f"Error: {config_path} not found")
        sys.exit(1)

    try:
        print(f"Loading config from {config_path}...")
        config = load_config(config_path)

        print(f"Parsing fixtures from {csv_path}...")
        fixtures = parse_fixtures_csv(csv_path)
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(f"Loaded {len(fixtures)} fixtures")

    if not fixtures:
        print("No fixtures found in CSV. Check the format.")
        sys.exit(1)

    result = validate_schedule(fixtures, config["teams"], config["schedule"])
    print(format_validation_report(result))

    stats = compute_stats(fixtures, config["teams"])
    print("\n" + format_stats_report(stats))

    sys.exit(0 if result["valid"] else 1)


if __name__ == "__main__":
    main()
