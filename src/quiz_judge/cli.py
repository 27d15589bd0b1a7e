# Area: Shared
"""
quiz_judge.cli — Command-line interface
========================================

Provides the CLI entry point for playing a game in the terminal.

Usage:
    python -m quiz_judge --demo                     # Offline, no API key needed
    python -m quiz_judge --config config.json       # Run with config file
    python -m quiz_judge --store sqlite --scorer gemini --name Alice

Demo mode can be enabled via:
    1. CLI flag: --demo
    2. Config key: demo_mode: true
    3. Environment variable: DEMO_MODE=true
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

from ._config import VALID_CHOICES, apply_demo_mode, load_config, validate_config


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="quiz-judge",
        description="Year-end AI quiz - answers scored by a language model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m quiz_judge --demo
  python -m quiz_judge --config config.json
  python -m quiz_judge --demo --name Alice
  DEMO_MODE=true python -m quiz_judge
        """,
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Play offline: heuristic scorer and in-memory store",
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--name", type=str, help="Display name (prompted if omitted)")
    parser.add_argument("--store", choices=VALID_CHOICES["store"], help="Shared store backend")
    parser.add_argument("--scorer", choices=VALID_CHOICES["scorer"], help="Scoring backend")
    parser.add_argument("--questions", type=str, help="Path to a JSON question bank")

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Config file and environment, then CLI overrides, then demo mode."""
    config = load_config(args.config)

    if args.store:
        config["store"] = args.store
    if args.scorer:
        config["scorer"] = args.scorer
    if args.questions:
        config["questions_path"] = args.questions

    if args.demo or config.get("demo_mode"):
        config = apply_demo_mode(config)

    validate_config(config)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Imported here so --help works without the store and model SDKs loaded
    from .runner import GameRunner

    try:
        runner = GameRunner(config=config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return runner.run(display_name=args.name)
