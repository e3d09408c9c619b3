#!/usr/bin/env python3
"""League fixture planner.

Generate mode (default):
    fixtureplan [config.yaml] [-o OUTPUT_DIR]

    Generates a single round-robin from the YAML config and writes:
      {OUTPUT_DIR}/schedule.txt  - Round-by-round + per-team schedule
      {OUTPUT_DIR}/fixtures.csv  - One row per match
      {OUTPUT_DIR}/stats.txt     - Validation report + statistics

Standings mode:
    fixtureplan [config.yaml] --standings [--results results.csv]

    Builds the league table from the config's results (or a CSV with
    Home,Away,HomeScore,AwayScore columns) and writes standings.csv.

Examples:
    fixtureplan                              # default config.yaml
    fixtureplan spring.yaml -o spring2026    # custom output directory
    fixtureplan --standings --results week6.csv
"""

import argparse
import sys
from pathlib import Path

from fixtureplan.config import load_config, load_results_csv
from fixtureplan.constraints import validate_schedule, format_validation_report
from fixtureplan.errors import ValidationError
from fixtureplan.output import write_schedule, write_standings
from fixtureplan.scheduler import fixture_count, generate_schedule, round_count
from fixtureplan.standings import compute_standings, format_standings_table
from fixtureplan.stats import compute_stats, format_stats_report


def run_standings(config: dict, results_path: str | None, output_prefix: str) -> int:
    if results_path:
        print(f"Loading results from {results_path}...")
        results = load_results_csv(results_path)
    else:
        results = config["results"]
    print(f"Computing standings from {len(results)} completed matches...")

    rows = compute_standings(config["teams"], results, config["scoring"])
    print("\n" + format_standings_table(rows, title=config["league"]["name"]))
    print()
    write_standings(rows, output_prefix=output_prefix)
    return 0


def run_generate(config: dict, output_prefix: str) -> int:
    teams = config["teams"]
    schedule_config = config["schedule"]

    print(f"Generating schedule for {len(teams)} teams "
          f"({fixture_count(len(teams))} matches in {round_count(len(teams))} rounds) "
          f"from {schedule_config.start_date}...")
    fixtures = generate_schedule(teams, schedule_config)

    print("\nValidating...")
    result = validate_schedule(fixtures, teams, schedule_config)
    report = format_validation_report(result)
    print(report)

    stats = compute_stats(fixtures, teams)
    stats_text = format_stats_report(stats)
    print("\n" + stats_text)

    print("\nWriting output files...")
    write_schedule(fixtures, output_prefix=output_prefix,
                   title=config["league"]["name"])

    stats_path = Path(output_prefix) / "stats.txt"
    stats_path.write_text(report + "\n\n" + stats_text)
    print(f"Written: {stats_path}")

    if result["valid"]:
        print(f"\nSchedule generated successfully: {len(fixtures)} matches "
              f"in {stats['rounds']} rounds.")
        return 0
    print(f"\nSchedule has {len(result['errors'])} constraint violations.")
    return 1


def main():
    parser = argparse.ArgumentParser(
        description="League fixture planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Exit codes:
  0  Schedule (or standings) produced with no violations
  1  Constraint violations, invalid input, or missing files
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument(
        "--output-prefix", "-o", default="output",
        help="Output directory for generated files (default: output/)"
    )
    parser.add_argument(
        "--standings", action="store_true",
        help="Compute the league table instead of generating fixtures"
    )
    parser.add_argument(
        "--results", metavar="CSV",
        help="Completed matches CSV for --standings (default: config results)"
    )
    args = parser.parse_args()

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)
    if args.results and not Path(args.results).exists():
        print(f"Error: results file {args.results} not found")
        sys.exit(1)

    try:
        print(f"Loading config from {config_path}...")
        config = load_config(config_path)
        if args.standings:
            code = run_standings(config, args.results, args.output_prefix)
        else:
            code = run_generate(config, args.output_prefix)
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    sys.exit(code)


if __name__ == "__main__":
    main()
