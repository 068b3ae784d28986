import argparse
import json
import logging
import random
import sys
from dataclasses import asdict

from .config import settings
from .dependencies import create_verdict_engine
from .exceptions import InvalidInput
from .logging_config import configure_logging
from .verdict_engine import VerdictEngine

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check a URL or phone number for safety")
    parser.add_argument("kind", choices=["url", "phone"], help="What is being checked")
    parser.add_argument("value", help="URL or phone number")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip remote services and use local heuristics only",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.random_seed,
        help="Seed for the heuristic phone risk estimate",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    configure_logging(
        level=settings.log_level,
        fmt=settings.log_format,
        log_file=settings.log_file,
        json_format=settings.log_json,
        stream=sys.stderr,
    )
    args = parse_args(argv)

    if args.offline:
        engine = VerdictEngine(rng=random.Random(args.seed))
    else:
        engine = create_verdict_engine(settings)
        engine.rng = random.Random(args.seed)

    try:
        if args.kind == "url":
            verdict = engine.evaluate_url(args.value)
        else:
            verdict = engine.evaluate_phone(args.value)
    except InvalidInput as exc:
        logger.error("%s", exc)
        return 1

    print(json.dumps(asdict(verdict), default=str, indent=2))
    return 0 if verdict.is_safe else 2


if __name__ == "__main__":
    raise SystemExit(main())
