#!/usr/bin/env python3
"""
Command-line interface for the football analytics engine.

Runs the engines over JSON files of match/team records, or against the
FootyStats API for a league season.

Usage:
    footy-analytics table --matches matches.json --teams teams.json
    footy-analytics predict --matches matches.json --teams teams.json --home 1 --away 2
    footy-analytics season --season-id 9660 --view trends
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from loguru import logger
from pydantic import ValidationError

from prediction import PredictionOptions, format_prediction_report, predict_match, prediction_to_json
from src.analytics.league import analyze_season_trends, calculate_league_statistics, generate_league_table
from src.analytics.team_performance import (
    analyze_team_form,
    calculate_performance_metrics,
    calculate_team_strength,
    compare_teams,
)
from src.config import AnalyticsConfig, load_config
from src.models import MatchRecord, TeamRecord
from src.service.analytics_service import AnalyticsService
from src.service.data_loader import load_records_file, sort_by_kickoff


class InputError(Exception):
    """Input files could not be used."""


def configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI usage."""
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG")
    else:
        logger.add(sys.stderr, level="WARNING")


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def load_matches(path: str) -> list[MatchRecord]:
    """Load match records in kickoff order."""
    try:
        parsed = load_records_file(path, MatchRecord)
    except (OSError, ValueError) as e:
        raise InputError(f"Cannot load matches from {path}: {e}") from e
    return sort_by_kickoff(parsed.records)


def load_teams(path: str | None) -> list[TeamRecord]:
    if path is None:
        return []
    try:
        return load_records_file(path, TeamRecord).records
    except (OSError, ValueError) as e:
        raise InputError(f"Cannot load teams from {path}: {e}") from e


def find_team(teams: list[TeamRecord], team_id: int) -> TeamRecord:
    """Team from the list, or an unnamed record when no teams file was given."""
    for team in teams:
        if team.id == team_id:
            return team
    if teams:
        raise InputError(f"Team {team_id} not found in teams file")
    return TeamRecord(id=team_id)


def print_table(rows: list[Any]) -> None:
    """Print a league table."""
    print(f"{'Pos':>3}  {'Team':<24} {'P':>3} {'W':>3} {'D':>3} {'L':>3} {'GF':>4} {'GA':>4} {'GD':>4} {'Pts':>4}  Form")
    print("-" * 72)
    for row in rows:
        print(
            f"{row.position:>3}  {row.team_name[:24]:<24} {row.played:>3} {row.won:>3} {row.drawn:>3} "
            f"{row.lost:>3} {row.goals_for:>4} {row.goals_against:>4} {row.goal_difference:>+4} "
            f"{row.points:>4}  {row.form}"
        )


def cmd_table(args: argparse.Namespace, config: AnalyticsConfig) -> int:
    """Print the standings table."""
    matches = load_matches(args.matches)
    teams = load_teams(args.teams)
    table = generate_league_table(matches, teams)

    if args.json:
        print_json([row.to_dict() for row in table])
    else:
        print_table(table)
    return 0


def cmd_stats(args: argparse.Namespace, config: AnalyticsConfig) -> int:
    """Print league statistics."""
    statistics = calculate_league_statistics(load_matches(args.matches))
    print_json(statistics.to_dict())
    return 0


def cmd_trends(args: argparse.Namespace, config: AnalyticsConfig) -> int:
    """Print season analysis."""
    analysis = analyze_season_trends(load_matches(args.matches), load_teams(args.teams), args.season)
    print_json(analysis.to_dict())
    return 0


def cmd_form(args: argparse.Namespace, config: AnalyticsConfig) -> int:
    """Print form and strength for one team."""
    matches = [match for match in load_matches(args.matches) if match.is_complete]
    window = args.window or config.engine.form_window

    form = analyze_team_form(matches, args.team, window)
    metrics = calculate_performance_metrics(matches, args.team)

    print_json(
        {
            "team_id": args.team,
            "form": form.to_dict(),
            "metrics": metrics.to_dict(),
            "strength": calculate_team_strength(metrics, form),
        }
    )
    return 0


def cmd_compare(args: argparse.Namespace, config: AnalyticsConfig) -> int:
    """Print a two-team comparison."""
    matches = [match for match in load_matches(args.matches) if match.is_complete]
    print_json(compare_teams(matches, args.home, args.away).to_dict())
    return 0


def cmd_predict(args: argparse.Namespace, config: AnalyticsConfig) -> int:
    """Predict a fixture from recent form."""
    matches = [match for match in load_matches(args.matches) if match.is_complete]
    teams = load_teams(args.teams)

    try:
        options = PredictionOptions(
            include_h2h=args.h2h,
            include_venue=args.venue,
            form_matches=args.form_matches or config.engine.form_window,
            league_average_goals=config.engine.league_average_goals,
            home_advantage=config.engine.home_advantage_multiplier,
        )
    except ValidationError as e:
        raise InputError(f"Invalid prediction options: {e}") from e

    home_team = find_team(teams, args.home)
    away_team = find_team(teams, args.away)
    home_form = [m for m in matches if m.involves(home_team.id)][-options.form_matches :]
    away_form = [m for m in matches if m.involves(away_team.id)][-options.form_matches :]

    result = predict_match(home_team, away_team, home_form, away_form, options)

    if args.json:
        print_json(prediction_to_json(result))
    else:
        print(format_prediction_report(result))
    return 0


def cmd_season(args: argparse.Namespace, config: AnalyticsConfig) -> int:
    """Run a season view against the FootyStats API."""
    with AnalyticsService(config) as service:
        if args.view == "stats":
            result = service.get_league_statistics(args.season_id)
        elif args.view == "table":
            result = service.get_league_table(args.season_id)
        elif args.view == "analytics":
            result = service.get_table_analytics(args.season_id)
        else:
            result = service.get_season_trends(args.season_id)

    print_json(result.to_dict())
    return 0 if result.success else 1


COMMANDS = {
    "table": cmd_table,
    "stats": cmd_stats,
    "trends": cmd_trends,
    "form": cmd_form,
    "compare": cmd_compare,
    "predict": cmd_predict,
    "season": cmd_season,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="footy-analytics",
        description="Football statistics and match prediction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  footy-analytics table --matches matches.json --teams teams.json
  footy-analytics form --matches matches.json --team 93
  footy-analytics predict --matches matches.json --home 93 --away 59 --h2h
  footy-analytics season --season-id 9660 --view table
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", default=None, help="Path to YAML config (default: config/analytics.yaml)")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    table_parser = subparsers.add_parser("table", help="League table from match results")
    table_parser.add_argument("--matches", required=True, help="JSON file of match records")
    table_parser.add_argument("--teams", required=True, help="JSON file of team records")
    table_parser.add_argument("--json", action="store_true", help="Output JSON instead of text")

    stats_parser = subparsers.add_parser("stats", help="League-wide statistics")
    stats_parser.add_argument("--matches", required=True, help="JSON file of match records")

    trends_parser = subparsers.add_parser("trends", help="Season trend analysis")
    trends_parser.add_argument("--matches", required=True, help="JSON file of match records")
    trends_parser.add_argument("--teams", required=True, help="JSON file of team records")
    trends_parser.add_argument("--season", default="", help="Season label")

    form_parser = subparsers.add_parser("form", help="Team form and strength")
    form_parser.add_argument("--matches", required=True, help="JSON file of match records")
    form_parser.add_argument("--team", type=int, required=True, help="Team ID")
    form_parser.add_argument("--window", type=int, default=None, help="Form window (default from config)")

    compare_parser = subparsers.add_parser("compare", help="Compare two teams")
    compare_parser.add_argument("--matches", required=True, help="JSON file of match records")
    compare_parser.add_argument("--home", type=int, required=True, help="Home team ID")
    compare_parser.add_argument("--away", type=int, required=True, help="Away team ID")

    predict_parser = subparsers.add_parser("predict", help="Predict a fixture")
    predict_parser.add_argument("--matches", required=True, help="JSON file of match records")
    predict_parser.add_argument("--teams", default=None, help="JSON file of team records (for names)")
    predict_parser.add_argument("--home", type=int, required=True, help="Home team ID")
    predict_parser.add_argument("--away", type=int, required=True, help="Away team ID")
    predict_parser.add_argument("--h2h", action="store_true", help="Head-to-head data considered")
    predict_parser.add_argument("--venue", action="store_true", help="Venue effects considered")
    predict_parser.add_argument("--form-matches", type=int, default=None, help="Form matches per side")
    predict_parser.add_argument("--json", action="store_true", help="Output JSON instead of a report")

    season_parser = subparsers.add_parser("season", help="Season analytics from the FootyStats API")
    season_parser.add_argument("--season-id", type=int, required=True, help="FootyStats season ID")
    season_parser.add_argument(
        "--view", choices=["stats", "table", "analytics", "trends"], default="table", help="What to compute"
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = load_config(args.config)
    except ValidationError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        return COMMANDS[args.command](args, config)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
