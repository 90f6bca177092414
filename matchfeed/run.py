"""
Command-line runner for the ranking core.

Usage:
    python -m matchfeed.run --config configs/config.yaml --profiles users.csv feed --viewer user_00001
    python -m matchfeed.run --synthetic 500 compatibility --user-a user_00001 --user-b user_00002
    python -m matchfeed.run --profiles users.json visibility
    python -m matchfeed.run probability --swipes 5 --likes-waiting 10

Every command prints JSON to stdout. Logs go to stderr.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .configs import load_config, validate_config, get_config_value
from .engine import MatchingEngine
from .errors import MatchingError
from .schema import ConnectionMode, Profile

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config or flag."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def _load_population(args: argparse.Namespace) -> List[Profile]:
    from .data_loading import load_profiles, create_synthetic_profiles

    if args.profiles:
        return load_profiles(args.profiles)
    if args.synthetic:
        seed = args.seed if args.seed is not None else 43
        return create_synthetic_profiles(args.synthetic, random_seed=seed)
    raise MatchingError("This command needs --profiles or --synthetic")


def _find(profiles: List[Profile], user_id: str) -> Profile:
    for profile in profiles:
        if profile.user_id == user_id:
            return profile
    raise MatchingError(f"User not found: {user_id}")


def run_command(args: argparse.Namespace, config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Execute one CLI command.

    Args:
        args: Parsed arguments
        config: Loaded configuration dictionary

    Returns:
        JSON-serializable result
    """
    engine = MatchingEngine.from_config(config, random_seed=args.seed)

    if args.command == "probability":
        return {
            "swipes_this_session": args.swipes,
            "likes_waiting": args.likes_waiting,
            "match_probability": engine.match_probability(args.swipes, args.likes_waiting),
        }

    profiles = _load_population(args)

    if args.command == "feed":
        from .evaluation import summarize_feed

        viewer = _find(profiles, args.viewer)
        feed = engine.generate_feed(
            viewer,
            profiles,
            args.mode,
            limit=args.limit,
            offset=args.offset,
            include_outside_preferences=args.include_outside,
        )
        return {
            "feed": [entry.to_dict() for entry in feed],
            "count": len(feed),
            "connection_mode": args.mode,
            "summary": summarize_feed(feed),
        }

    if args.command == "compatibility":
        result = engine.compatibility(_find(profiles, args.user_a), _find(profiles, args.user_b))
        return {"user_a": args.user_a, "user_b": args.user_b, "compatibility": result.to_dict()}

    if args.command == "visibility":
        from .evaluation import summarize_visibility

        recompute = engine.recompute_visibility(profiles)
        result = recompute.to_dict()
        result["summary"] = summarize_visibility(recompute)
        return result

    raise MatchingError(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank candidate profiles for a feed")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument("--profiles", type=str, default=None,
                        help="CSV or JSON profile snapshot")
    parser.add_argument("--synthetic", type=int, default=None,
                        help="Generate N synthetic profiles instead of loading a snapshot")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the feed shuffle (overrides config)")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (overrides config)")

    sub = parser.add_subparsers(dest="command", required=True)

    feed = sub.add_parser("feed", help="Generate a feed for one viewer")
    feed.add_argument("--viewer", required=True)
    feed.add_argument("--mode", default=ConnectionMode.DATING.value,
                      choices=[m.value for m in ConnectionMode])
    feed.add_argument("--limit", type=int, default=None)
    feed.add_argument("--offset", type=int, default=0)
    feed.add_argument("--include-outside", action="store_true",
                      help="Include candidates below the match threshold")

    compat = sub.add_parser("compatibility", help="Score two profiles against each other")
    compat.add_argument("--user-a", required=True)
    compat.add_argument("--user-b", required=True)

    sub.add_parser("visibility", help="Recompute visibility for the whole population")

    prob = sub.add_parser("probability", help="Engagement estimate")
    prob.add_argument("--swipes", type=int, required=True)
    prob.add_argument("--likes-waiting", type=int, required=True)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        logger.warning(f"{e}; using built-in defaults")
        config = {}

    for issue in validate_config(config) if config else []:
        logger.warning(f"Config issue: {issue}")

    setup_logging(args.log_level or get_config_value(config, "global.log_level", "INFO"))

    # The assembler takes pagination as given; reject bad values here
    negative_limit = args.command == "feed" and args.limit is not None and args.limit < 0
    if negative_limit or (args.command == "feed" and args.offset < 0):
        logger.error("--limit and --offset must be non-negative")
        return 1

    try:
        result = run_command(args, config)
    except (MatchingError, FileNotFoundError, ValueError) as e:
        logger.error(f"Command failed: {e}")
        return 1

    json.dump(result, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
