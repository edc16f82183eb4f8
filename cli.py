"""Command-line demo: print an ordered deck or a handful of random draws."""
from __future__ import annotations

import argparse
import json
import random
import sys
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from deck import DEFAULT_SWAP_COUNT, generate_deck, shuffle
from drawer import RandomCardGenerator
from eventlog import CardEventLogger, create_logger
from render import STYLES, describe_draw, format_card

MENU_PROMPT = "dial 1 for card deck ; or dial 2 to pick cards from deck"
COUNT_PROMPT = "insert value of how much card you want: "


@dataclass
class DemoConfig:
    seed: Optional[int] = None
    style: str = "name"
    swap_count: int = DEFAULT_SWAP_COUNT
    event_log_mode: Optional[str] = None
    event_log_path: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "DemoConfig":
        event_log = data.get("event_log", {})
        event_log_path = event_log.get("path")
        return cls(
            seed=data.get("seed"),
            style=data.get("style", "name"),
            swap_count=data.get("swap_count", DEFAULT_SWAP_COUNT),
            event_log_mode=event_log.get("mode"),
            event_log_path=Path(event_log_path) if event_log_path else None,
        )


class DemoApp:
    def __init__(self, config: DemoConfig) -> None:
        self.config = config
        self.rng = random.Random(config.seed)
        self.logger: Optional[CardEventLogger] = None
        if config.event_log_mode:
            self.logger = create_logger(
                config.event_log_mode,
                destination=config.event_log_path,
                session_id=uuid.uuid4().hex,
            )

    def print_deck(self, *, shuffled: bool = False) -> None:
        cards = generate_deck()
        swap_count = None
        if shuffled:
            swap_count = self.config.swap_count
            shuffle(cards, self.rng, swap_count)

        for card in cards:
            print(format_card(card, self.config.style))
        if self.logger is not None:
            self.logger.log_deck(cards, swap_count=swap_count)

    def print_draws(self, count: int, *, ordinals: bool = False) -> None:
        generator = RandomCardGenerator(self.rng)
        for position, card in enumerate(generator.create_many(count)):
            if ordinals:
                print(describe_draw(card, self.config.style))
            else:
                print(format_card(card, self.config.style))
            if self.logger is not None:
                self.logger.log_draw(position, card)

    def run_menu(self) -> int:
        print(MENU_PROMPT)
        dial = _read_int()
        if dial is None:
            return 2

        if dial == 1:
            self.print_deck()
        elif dial == 2:
            print(COUNT_PROMPT)
            count = _read_int()
            if count is None:
                return 2
            self.print_draws(count, ordinals=True)
        else:
            print("invalid operation")
        return 0

    def close(self) -> None:
        if self.logger is not None:
            self.logger.close()
            self.logger = None


def _read_int() -> Optional[int]:
    raw = input()
    try:
        return int(raw.strip())
    except ValueError:
        print(f"expected an integer, got {raw!r}", file=sys.stderr)
        return None


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, help="Optional JSON config file", default=None)
    common.add_argument("--seed", type=int, help="RNG seed", default=None)
    common.add_argument("--style", choices=STYLES, help="Card rendering style", default=None)
    common.add_argument(
        "--event-log-mode",
        choices=["stdout", "jsonl", "parquet"],
        help="Where to stream structured card events",
        default=None,
    )
    common.add_argument(
        "--event-log-path",
        type=Path,
        help="Destination file for JSONL or Parquet logs",
        default=None,
    )

    parser = argparse.ArgumentParser(description="Card deck generator and drawer demo")
    commands = parser.add_subparsers(dest="command", required=True)

    deck_parser = commands.add_parser("deck", parents=[common], help="Print a full deck")
    deck_parser.add_argument("--shuffle", action="store_true", help="Weak-shuffle the deck first")
    deck_parser.add_argument("--swaps", type=int, help="Number of random pairwise swaps", default=None)

    draw_parser = commands.add_parser("draw", parents=[common], help="Print random draws")
    draw_parser.add_argument("count", type=int, help="How many cards to draw")
    draw_parser.add_argument("--ordinals", action="store_true", help="Show suit/rank ordinals")

    commands.add_parser("menu", parents=[common], help="Interactive dial menu")
    return parser.parse_args(argv)


def _load_config_from_file(config_path: Optional[Path]) -> Dict:
    if not config_path:
        return {}
    return json.loads(config_path.read_text())


def _build_demo_config(args: argparse.Namespace) -> DemoConfig:
    config = DemoConfig.from_dict(_load_config_from_file(args.config))

    if args.seed is not None:
        config.seed = args.seed
    if args.style is not None:
        config.style = args.style
    if getattr(args, "swaps", None) is not None:
        config.swap_count = args.swaps
    if args.event_log_mode is not None:
        config.event_log_mode = args.event_log_mode
    if args.event_log_path is not None:
        config.event_log_path = args.event_log_path
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    app = DemoApp(_build_demo_config(args))

    try:
        if args.command == "deck":
            app.print_deck(shuffled=args.shuffle)
        elif args.command == "draw":
            app.print_draws(args.count, ordinals=args.ordinals)
        else:
            return app.run_menu()
    finally:
        app.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
