"""Tests for config.py — parsing and loading."""

from datetime import date, time
from pathlib import Path

import pytest

from fixtureplan.config import (
    load_config, load_results_csv, parse_date, parse_score, parse_time,
)
from fixtureplan.errors import ValidationError
from fixtureplan.models import DayOfWeek
from fixtureplan.scheduler import generate_schedule

SAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "config.yaml"


def _write(tmp_path, text, name="league.yaml"):
    path = tmp_path / name
    path.write_text(text)
    return path


class TestParseTime:
    def test_24hour(self):
        assert parse_time("17:00") == time(17, 0)
        assert parse_time("9:30") == time(9, 30)

    def test_am_pm(self):
        assert parse_time("10am") == time(10, 0)
        assert parse_time("5:30pm") == time(17, 30)
        assert parse_time("12pm") == time(12, 0)
        assert parse_time("12am") == time(0, 0)

    def test_case_insensitive(self):
        assert parse_time("5PM") == time(17, 0)

    def test_bad(self):
        with pytest.raises(ValidationError):
            parse_time("half past ten")
        with pytest.raises(ValidationError):
            parse_time("24:00")
        with pytest.raises(ValidationError):
            parse_time("10:75")


class TestParseDate:
    def test_iso(self):
        assert parse_date("2026-11-02") == date(2026, 11, 2)

    def test_bad(self):
        with pytest.raises(ValidationError):
            parse_date("2026-13-01")
        with pytest.raises(ValidationError):
            parse_date("Nov 2")


class TestParseScore:
    def test_dash_and_colon(self):
        assert parse_score("2-1") == (2, 1)
        assert parse_score("0:0") == (0, 0)
        assert parse_score(" 3 - 4 ") == (3, 4)

    def test_bad(self):
        with pytest.raises(ValidationError):
            parse_score("two-one")


class TestLoadConfig:
    def test_sample_config(self):
        config = load_config(SAMPLE_CONFIG)
        assert config["league"]["name"] == "Riverside Autumn League"
        assert config["league"]["start_date"] == date(2026, 11, 2)
        schedule = config["schedule"]
        assert schedule.matches_per_day == 3
        assert schedule.exclude_days == frozenset({DayOfWeek.Sun})
        assert schedule.preferred_start_time == time(10, 0)
        assert config["teams"] == ["Lions", "Tigers", "Bears", "Wolves", "Eagles", "Hawks"]
        assert len(config["results"]) == 4
        first = config["results"][0]
        assert (first.home_team_id, first.away_team_id,
                first.home_score, first.away_score) == ("Lions", "Hawks", 2, 1)

    def test_defaults(self, tmp_path):
        path = _write(tmp_path, "league:\n  start_date: 2026-11-02\nteams: [A, B]\n")
        config = load_config(path)
        schedule = config["schedule"]
        assert schedule.match_duration_minutes == 90
        assert schedule.break_between_matches == 30
        assert schedule.matches_per_day == 4
        assert schedule.exclude_days == frozenset({DayOfWeek.Sun})
        scoring = config["scoring"]
        assert (scoring.points_for_win, scoring.points_for_draw,
                scoring.points_for_loss) == (3, 1, 0)
        assert config["results"] == []

    def test_team_count(self, tmp_path):
        path = _write(tmp_path, "league:\n  start_date: 2026-11-02\nteams: 5\n")
        assert load_config(path)["teams"] == ["T1", "T2", "T3", "T4", "T5"]

    def test_unquoted_start_time(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\n  preferred_start_time: 18:30\n"
            "teams: [A, B]\n"
        ))
        assert load_config(path)["schedule"].preferred_start_time == time(18, 30)

    def test_exclude_days_forms(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\n  exclude_days: 6\nteams: [A, B]\n"
        ))
        assert load_config(path)["schedule"].exclude_days == frozenset({DayOfWeek.Sat})
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\n  exclude_days: [Saturday, Sun]\n"
            "teams: [A, B]\n"
        ))
        assert load_config(path)["schedule"].exclude_days == frozenset(
            {DayOfWeek.Sat, DayOfWeek.Sun})
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\n  exclude_days: []\nteams: [A, B]\n"
        ))
        assert load_config(path)["schedule"].exclude_days == frozenset()

    def test_exclude_sunday_by_index(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-01\n  exclude_days: 0\nteams: [A, B, C]\n"
        ))
        config = load_config(path)
        assert config["schedule"].exclude_days == frozenset({DayOfWeek.Sun})
        fixtures = generate_schedule(config["teams"], config["schedule"])
        assert fixtures[0].scheduled_at.date() == date(2026, 11, 2)
        assert all(DayOfWeek.of(f.scheduled_at.date()) != DayOfWeek.Sun
                   for f in fixtures)

    def test_exclude_days_null(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\n  exclude_days:\nteams: [A, B]\n"
        ))
        assert load_config(path)["schedule"].exclude_days == frozenset()

    def test_result_fields(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\nteams: [A, B]\n"
            "results:\n  - {home: A, away: B, home_score: 4, away_score: 2}\n"
        ))
        result = load_config(path)["results"][0]
        assert (result.home_score, result.away_score) == (4, 2)

    def test_missing_league(self, tmp_path):
        path = _write(tmp_path, "teams: [A, B]\n")
        with pytest.raises(ValidationError, match="missing 'league'"):
            load_config(path)

    def test_empty_league_section(self, tmp_path):
        path = _write(tmp_path, "league:\nteams: [A, B]\n")
        with pytest.raises(ValidationError, match="start_date"):
            load_config(path)

    def test_league_not_a_mapping(self, tmp_path):
        path = _write(tmp_path, "league: [a, b]\nteams: [A, B]\n")
        with pytest.raises(ValidationError, match="mapping"):
            load_config(path)

    def test_non_numeric_field(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\n  matches_per_day: four\nteams: [A, B]\n"
        ))
        with pytest.raises(ValidationError, match="league.matches_per_day"):
            load_config(path)

    def test_non_numeric_scoring(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\nscoring: {win: lots}\nteams: [A, B]\n"
        ))
        with pytest.raises(ValidationError, match="scoring.win"):
            load_config(path)

    def test_result_without_score(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\nteams: [A, B]\n"
            "results:\n  - {home: A, away: B}\n"
        ))
        with pytest.raises(ValidationError, match="results.home_score"):
            load_config(path)

    def test_result_without_teams(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\nteams: [A, B]\n"
            "results:\n  - {score: 1-0}\n"
        ))
        with pytest.raises(ValidationError, match="needs 'home' and 'away'"):
            load_config(path)

    def test_late_start_time(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\n  preferred_start_time: \"22:30\"\n"
            "teams: [A, B]\n"
        ))
        with pytest.raises(ValidationError, match="cutoff"):
            load_config(path)

    def test_missing_start_date(self, tmp_path):
        path = _write(tmp_path, "league:\n  name: X\nteams: [A, B]\n")
        with pytest.raises(ValidationError, match="start_date"):
            load_config(path)

    def test_duplicate_team(self, tmp_path):
        path = _write(tmp_path, "league:\n  start_date: 2026-11-02\nteams: [A, B, A]\n")
        with pytest.raises(ValidationError, match="more than once"):
            load_config(path)

    def test_result_with_unknown_team(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\nteams: [A, B]\n"
            "results:\n  - {home: A, away: Z, score: 1-0}\n"
        ))
        with pytest.raises(ValidationError, match="unknown team Z"):
            load_config(path)

    def test_bad_schedule_values(self, tmp_path):
        path = _write(tmp_path, (
            "league:\n  start_date: 2026-11-02\n  matches_per_day: 0\nteams: [A, B]\n"
        ))
        with pytest.raises(ValidationError):
            load_config(path)


class TestLoadResultsCsv:
    def test_reads_rows(self, tmp_path):
        path = _write(tmp_path, (
            "Home,Away,HomeScore,AwayScore\n"
            "A,B,2,1\n"
            ",,,\n"
            "C,A,0,0\n"
        ), name="results.csv")
        results = load_results_csv(path)
        assert [(r.home_team_id, r.away_team_id, r.home_score, r.away_score)
                for r in results] == [("A", "B", 2, 1), ("C", "A", 0, 0)]

    def test_bad_score(self, tmp_path):
        path = _write(tmp_path, "Home,Away,HomeScore,AwayScore\nA,B,x,1\n",
                      name="results.csv")
        with pytest.raises(ValidationError, match="Bad score"):
            load_results_csv(path)
