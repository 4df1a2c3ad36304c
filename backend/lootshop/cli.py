import argparse
import json
from collections import Counter

from lootshop.core.config import get_settings
from lootshop.services.errors import InvalidConfiguration
from lootshop.services.reward_rules import RewardConfig
from lootshop.services.rewards import RewardGenerator


def _load_reward_config() -> RewardConfig:
    try:
        return get_settings().reward_config()
    except InvalidConfiguration as exc:
        raise SystemExit(f"Invalid reward configuration: {exc}")


def simulate_rewards(config: RewardConfig, draws: int, generator: RewardGenerator | None = None) -> dict:
    """Draw `draws` rewards and report observed vs configured tier shares."""
    generator = generator or RewardGenerator(config)
    counts: Counter[str] = Counter(generator.select_tier().value for _ in range(draws))
    expected = config.probabilities()
    return {
        "draws": draws,
        "tiers": {
            tier.tier.value: {
                "count": counts.get(tier.tier.value, 0),
                "observed": round(counts.get(tier.tier.value, 0) / draws, 4) if draws else 0.0,
                "expected": round(expected[tier.tier], 4),
                "discount_percent": tier.discount_percent,
            }
            for tier in config.tiers
        },
    }


def describe_config(config: RewardConfig) -> dict:
    return {
        "discount_n": config.order_interval,
        "tiers": [
            {"tier": tier.tier.value, "discount_percent": tier.discount_percent, "weight": tier.weight}
            for tier in config.tiers
        ],
    }


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lootshop reward utilities")
    subparsers = parser.add_subparsers(dest="command")
    simulate = subparsers.add_parser("simulate-rewards", help="Sample the reward tier distribution")
    simulate.add_argument("--draws", type=_positive_int, default=10_000, help="Number of draws (default 10000)")
    subparsers.add_parser("show-config", help="Print the effective reward configuration")
    return parser


def _run_cli_command(args: argparse.Namespace) -> bool:
    if args.command == "simulate-rewards":
        print(json.dumps(simulate_rewards(_load_reward_config(), args.draws), indent=2))
        return True

    if args.command == "show-config":
        print(json.dumps(describe_config(_load_reward_config()), indent=2))
        return True

    return False


def main():
    parser = _build_parser()
    args = parser.parse_args()
    if not _run_cli_command(args):
        parser.print_help()


if __name__ == "__main__":
    main()
