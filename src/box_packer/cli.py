from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from box_packer.config import Settings, load_settings
from box_packer.errors import InvalidArgumentError, PackingError
from box_packer.io.schemas import PackRequestSchema, result_to_schema
from box_packer.models import OversizePolicy, PackingStrategy, to_positive_decimal
from box_packer.packing.packer import pack_weights
from box_packer.report import format_result

logger = logging.getLogger(__name__)

STRATEGY_CHOICES = {"1": PackingStrategy.FIRST_FIT, "2": PackingStrategy.BEST_FIT}


def parse_weights(text: str) -> list[Decimal]:
    """
    Parse comma-separated weights ("5, 5,,3.5").

    Empty entries are ignored; anything else must be a finite positive number.
    """
    weights: list[Decimal] = []
    for token in text.split(","):
        token = token.strip()
        if not token:
            continue
        weights.append(to_positive_decimal(token, what=f"Item weight '{token}'"))
    return weights


def parse_strategy_choice(answer: str, default: PackingStrategy) -> PackingStrategy:
    """Map an interactive answer ("1", "2", a strategy name or blank) to a strategy."""
    answer = answer.strip()
    if not answer:
        return default
    if answer in STRATEGY_CHOICES:
        return STRATEGY_CHOICES[answer]
    return PackingStrategy.parse(answer)


def load_input(path: Path) -> PackRequestSchema:
    try:
        return PackRequestSchema.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise InvalidArgumentError(f"{path}: cannot read input file: {e}") from e
    except ValidationError as e:
        raise InvalidArgumentError(f"{path}: invalid input file: {e}") from e


def write_plan(plan: dict, path: str = "plan.json") -> None:
    """
    Write a plan dictionary to a JSON file.

    Creates parent folders if needed and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Writing plan to %s", output_path)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2, sort_keys=True)


def _is_interactive() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


def _prompt(message: str) -> str:
    print(message)
    return input()


def resolve_request(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    """
    Merge command-line flags, the optional input file and the configured
    defaults into packer arguments. Prompts for what is still missing when
    running on a terminal.
    """
    file_request = load_input(Path(args.input)) if args.input else PackRequestSchema()

    capacity: Optional[Any] = args.capacity if args.capacity is not None else file_request.capacity
    strategy: Optional[Any] = args.strategy or file_request.strategy
    weights: Optional[list[Any]] = None
    if args.weights is not None:
        weights = parse_weights(args.weights)
    elif args.input:
        weights = list(file_request.weights)

    if weights is None and _is_interactive():
        if capacity is None:
            capacity = _prompt("Enter box capacity:")
        if strategy is None:
            strategy = parse_strategy_choice(
                _prompt("Choose strategy (1: First Fit, 2: Best Fit):"), settings.strategy
            )
        weights = parse_weights(_prompt("Enter item weights (comma-separated):"))

    if capacity is None:
        capacity = settings.capacity
    if capacity is None:
        raise InvalidArgumentError("Box capacity is required (--capacity, input file or BOX_PACKER_CAPACITY)")
    if weights is None:
        raise InvalidArgumentError("Item weights are required (--weights or --input)")

    return {
        "box_capacity": capacity,
        "weights": weights,
        "strategy": strategy or settings.strategy,
        "oversize_policy": args.oversize or file_request.oversize_policy or settings.oversize_policy,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="box-packer",
        description="Pack item weights into identical boxes with a greedy heuristic",
    )
    parser.add_argument("--capacity", help="Capacity of every box")
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in PackingStrategy],
        help="first_fit = first box with room, best_fit = tightest box with room",
    )
    parser.add_argument("--weights", help='Comma-separated item weights, e.g. "5,5,5"')
    parser.add_argument("--input", help="Input request JSON file (capacity, strategy, weights)")
    parser.add_argument("--output", help="Output plan JSON file")
    parser.add_argument(
        "--oversize",
        choices=[p.value for p in OversizePolicy],
        help="skip = leave items heavier than a box out and report them, reject = fail",
    )
    parser.add_argument("--log-level", help="Logging level (default: BOX_PACKER_LOG_LEVEL or WARNING)")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except PackingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    level = (args.log_level or settings.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        parser.error(f"unknown log level: {args.log_level}")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        request = resolve_request(args, settings)
        result = pack_weights(**request)
    except PackingError as e:
        logger.error("Packing failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(format_result(result))
    if args.output:
        write_plan(result_to_schema(result).model_dump(), args.output)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
