"""Main CLI interface for the bracket simulator."""

import argparse
import logging
import sys
from pathlib import Path

from .bracket_generator import BracketGenerator
from .config import RANDOMNESS, SimulationConfig
from .data.loader import STAT_FILES, DataLoader
from .data.metric_builder import build_history_titles_metric
from .data.scrapers.ncaa_stats import NCAAStatsScraper
from .data.team_name_resolver import audit_aliases
from .simulation.bracket_simulator import ROUND_NAMES


def _load_config(args) -> SimulationConfig:
    config = DataLoader.load_config(args.config) if args.config else SimulationConfig()
    data = config.to_dict()
    if args.seed is not None:
        data["random_seed"] = args.seed
    if args.randomness is not None:
        data["randomness"] = args.randomness
        if RANDOMNESS not in data["enabled"]:
            data["enabled"].append(RANDOMNESS)
    return SimulationConfig.from_dict(data)


def _bracket_path(args) -> Path:
    if args.bracket:
        return Path(args.bracket)
    return DataLoader.stat_path(args.data_dir, "bracket")


def _label(bracket, team) -> str:
    region, seed = bracket.seed_for_team(team)
    return f"{team} (Seed {seed}, {region})" if seed is not None else str(team)


def simulate_bracket(args):
    """Simulate a bracket from the fetched datasets."""
    try:
        config = _load_config(args)
    except (OSError, ValueError) as e:
        print(f"Error loading config: {e}")
        return 1

    print(f"Loading datasets from {args.data_dir}...")
    stats = DataLoader.load_stats(args.data_dir)
    generator = BracketGenerator(config)

    if args.field:
        rounds = generator.generate_field(stats, size=args.field_size)
        if not rounds:
            print("Error: no teams with a winning percentage were found")
            return 1
        champion = rounds[-1][0].winner
        print(f"\n🏆 FIELD CHAMPION: {champion}")
        output = {"rounds": [[m.to_dict() for m in rnd] for rnd in rounds], "champion": champion}
        DataLoader.save_json(output, args.output)
        print(f"Saved results to {args.output}")
        return 0

    bracket_path = _bracket_path(args)
    try:
        bracket = DataLoader.load_bracket(bracket_path)
    except (OSError, ValueError) as e:
        print(f"Error loading bracket from {bracket_path}: {e}")
        return 1

    result = generator.generate(stats, bracket)

    print(f"\n{'='*60}")
    print("BRACKET SIMULATION")
    print(f"{'='*60}\n")

    if result.champion:
        print(f"🏆 CHAMPION: {_label(bracket, result.champion)}")

    print("\n📊 FINAL FOUR:")
    for team in result.region_champions.values():
        print(f"   - {_label(bracket, team)}")

    print(f"\n{ROUND_NAMES[4]}:")
    for m in result.final_four:
        print(f"   {m.team_a} {m.score_a:.3f} vs {m.team_b} {m.score_b:.3f} -> {m.winner}")

    upsets = []
    for m in result.all_matchups():
        _, seed_w = bracket.seed_for_team(m.winner)
        _, seed_l = bracket.seed_for_team(m.loser)
        if seed_w is not None and seed_l is not None and seed_w > seed_l:
            upsets.append(m)
    print(f"\n🎯 UPSETS: {len(upsets)}")

    print(f"\nSaving results to {args.output}...")
    DataLoader.save_json(result.to_dict(), args.output)
    print("✓ Done!")
    return 0


def create_sample_config(args):
    """Write the default configuration file."""
    DataLoader.save_config(SimulationConfig(), args.output)
    print(f"✓ Default config written to {args.output}")
    return 0


def audit_names(args):
    """Show how bracket teams resolve against the championship history."""
    bracket_path = _bracket_path(args)
    try:
        bracket = DataLoader.load_bracket(bracket_path)
        history = DataLoader.load_stat(args.data_dir, "historicalWinners")
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    metric = build_history_titles_metric(history)
    rows = audit_aliases(bracket, metric)

    print(f"{'Team':<28}{'Key':<28}{'Alias':<24}{'Titles':>7}  Method")
    for row in rows:
        print(f"{row['team']:<28}{row['normalized']:<28}{row['alias']:<24}{row['value']:>7g}  {row['method']}")

    unmatched = [row["team"] for row in rows if row["method"] == "fallback"]
    print(f"\n{len(unmatched)} bracket teams have no titles on record:")
    print(", ".join(unmatched))
    return 0


def fetch_data(args):
    """Fetch stat datasets from the NCAA stats API."""
    unknown = [k for k in args.stat or [] if k not in STAT_FILES]
    if unknown:
        print(f"Error: unknown stat keys {unknown}")
        return 1
    scraper = NCAAStatsScraper(min_delay=args.delay)
    written = scraper.fetch_all(
        args.output_dir,
        keys=args.stat,
        pages=args.pages,
        include_history=not args.skip_history,
    )
    print(f"✓ Wrote {len(written)} datasets to {args.output_dir}")
    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Weighted-metric March Madness bracket simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    simulate_parser = subparsers.add_parser("simulate", help="Simulate the tournament bracket")
    simulate_parser.add_argument("--data-dir", "-d", default="data", help="Directory with fetched JSON datasets")
    simulate_parser.add_argument("--bracket", "-b", default=None, help="Bracket JSON (default: <data-dir>/bracket-2025.json)")
    simulate_parser.add_argument("--config", "-c", default=None, help="Simulation config JSON")
    simulate_parser.add_argument("--output", "-o", default="bracket_result.json", help="Output result JSON")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument("--randomness", type=int, default=None, help="Randomness weight 0-100 (overrides config)")
    simulate_parser.add_argument("--field", action="store_true", help="Simulate an open field by winning percentage instead of the bracket")
    simulate_parser.add_argument("--field-size", type=int, default=64, help="Open field size (default: 64)")

    sample_parser = subparsers.add_parser("sample-config", help="Write the default simulation config")
    sample_parser.add_argument("--output", "-o", default="config.json", help="Output config JSON")

    audit_parser = subparsers.add_parser("audit-names", help="Audit bracket team name resolution against history")
    audit_parser.add_argument("--data-dir", "-d", default="data", help="Directory with fetched JSON datasets")
    audit_parser.add_argument("--bracket", "-b", default=None, help="Bracket JSON (default: <data-dir>/bracket-2025.json)")

    fetch_parser = subparsers.add_parser("fetch", help="Fetch stat datasets from the NCAA stats API")
    fetch_parser.add_argument("--output-dir", "-o", default="data", help="Destination for JSON datasets")
    fetch_parser.add_argument("--pages", type=int, default=None, help="Pages per stat (default: 8)")
    fetch_parser.add_argument("--delay", type=float, default=0.25, help="Seconds between requests")
    fetch_parser.add_argument("--stat", action="append", default=None, help="Only fetch this dataset key (repeatable)")
    fetch_parser.add_argument("--skip-history", action="store_true", help="Skip the championship history")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "simulate":
        return simulate_bracket(args)
    elif args.command == "sample-config":
        return create_sample_config(args)
    elif args.command == "audit-names":
        return audit_names(args)
    elif args.command == "fetch":
        return fetch_data(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
