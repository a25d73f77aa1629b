"""Command-line entry point for the club crawler."""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from .config import RunConfiguration, validate_configuration
from .crawler import run_crawler
from .errors import ConfigurationError, FatalError
from .storage import output_filename, save_json

logger = logging.getLogger("club_scraper.cli")

YES_ANSWERS = {"y", "yes"}

PROMPTS = (
    ("reduced_mode", "Run in dry mode (only scrape letter A)? (y/n): "),
    ("download_images", "Download club logo images? (y/n): "),
    ("save_json", "Save results as JSON file? (y/n): "),
)


def parse_answer(answer: Optional[str]) -> bool:
    """Only an explicit yes counts as yes."""
    return (answer or "").strip().lower() in YES_ANSWERS


def ask_configuration(input_fn: Callable[[str], str] = input) -> dict:
    """Ask the three yes/no questions and map them onto switch names."""
    return {name: parse_answer(input_fn(question)) for name, question in PROMPTS}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Crawl the hollandsevelden.nl club directory and enrich each club from its detail page.",
    )
    parser.add_argument(
        "--reduced",
        dest="reduced_mode",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Only crawl clubs starting with A",
    )
    parser.add_argument(
        "--download-images",
        dest="download_images",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Download each club's large logo to logos/big/",
    )
    parser.add_argument(
        "--save-json",
        dest="save_json",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write the results to clubs.json",
    )
    parser.add_argument(
        "--output",
        default=".",
        type=Path,
        help="Directory where the JSON file and logos should be written",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Navigation timeout in seconds",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def build_configuration(
    args: argparse.Namespace,
    input_fn: Callable[[str], str] = input,
) -> RunConfiguration:
    """Merge CLI switches with interactive answers.

    Prompts are only shown when none of the three switches was given on the
    command line; switches left unset are then off.
    """
    given = {
        name: getattr(args, name)
        for name, _ in PROMPTS
        if getattr(args, name) is not None
    }
    switches = given if given else ask_configuration(input_fn)
    config = RunConfiguration(
        reduced_mode=switches.get("reduced_mode", False),
        download_images=switches.get("download_images", False),
        save_json=switches.get("save_json", False),
        output_root=Path(args.output).resolve(),
        navigation_timeout=args.timeout,
        headless=not args.headed,
    )
    return validate_configuration(config)


def _log_configuration(config: RunConfiguration) -> None:
    logger.info(
        "Configuration: dry run=%s, download images=%s, save JSON=%s",
        config.reduced_mode,
        config.download_images,
        config.save_json,
    )


def _raise_interrupt(signum, frame) -> None:
    raise KeyboardInterrupt


def run(config: RunConfiguration) -> int:
    result = asyncio.run(run_crawler(config))

    total = len(result.entities)
    average = result.total_seconds / total if total else 0.0
    logger.info(
        "Scraping completed: %d clubs in %.2fs (%.2fs per club, %d partial)",
        total,
        result.total_seconds,
        average,
        result.partial_count,
    )
    for metrics in result.partitions:
        logger.debug(
            "Letter %s -> %d clubs, %d partial, %.2fs",
            metrics.letter.upper(),
            metrics.stub_count,
            metrics.partial_count,
            metrics.seconds,
        )

    if config.save_json:
        save_json(result, config.output_root / output_filename(config))
    else:
        logger.info("Skipped saving JSON file (%d clubs found)", total)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    try:
        config = build_configuration(args)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 1
    except (EOFError, KeyboardInterrupt):
        logger.error("No configuration given; aborting")
        return 1
    _log_configuration(config)

    previous_handler = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        return run(config)
    except KeyboardInterrupt:
        logger.warning("Received interrupt or termination signal, shutting down")
        return 130
    except FatalError as exc:
        logger.error("Error during scraping: %s", exc)
        return 1
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unexpected error during scraping")
        return 1
    finally:
        signal.signal(signal.SIGTERM, previous_handler)


if __name__ == "__main__":
    sys.exit(main())
