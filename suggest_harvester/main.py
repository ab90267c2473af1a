from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

from .browser import SeleniumBrowser
from .config import load_config
from .pacing import PacingPolicy
from .pipeline import process_sheet
from .workbook import KeywordWorkbook, day_name, normalize_day, select_sheet


def _load_env_files(config_path: Path) -> None:
    """Load environment variables from .env files."""

    # Load default .env in current working directory if present
    load_dotenv(override=False)

    # Load .env placed next to the config file if it exists
    config_env = config_path.parent / ".env"
    if config_env.exists():
        load_dotenv(dotenv_path=config_env, override=False)


LOGGER = logging.getLogger("suggest_harvester")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Collect the longest and shortest autocomplete suggestion for each keyword"
    )
    parser.add_argument("--config", required=True, help="Path to the YAML configuration file")
    parser.add_argument(
        "--day",
        default=None,
        help="Process the sheet for this weekday instead of today's (e.g. MONDAY)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Optional limit for the number of keywords to search",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not save the workbook; print the results to stdout instead",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 0:
        parser.error("--limit must be 0 or greater")
    return args


def main(argv: Sequence[str] | None = None, *, today: date | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config_path = Path(args.config).expanduser().resolve()
    _load_env_files(config_path)
    config = load_config(config_path)

    day = normalize_day(args.day) if args.day else day_name(today or date.today())
    workbook = KeywordWorkbook(config.workbook)
    LOGGER.info("Reading workbook %s", workbook.path)
    sheet = select_sheet(workbook, day)
    if sheet is None:
        workbook.close()
        return 0

    pacing = PacingPolicy.from_config(config.pacing)
    browser = SeleniumBrowser.launch(config.browser)
    try:
        processed, _ = process_sheet(
            sheet,
            browser,
            config.browser,
            pacing,
            limit=args.limit,
        )
    finally:
        browser.close()

    if args.dry_run:
        LOGGER.info("Dry run enabled; writing results to stdout")
        print(json.dumps([asdict(row) for row in processed], ensure_ascii=False, indent=2))
        workbook.close()
    else:
        workbook.save()
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    run()
