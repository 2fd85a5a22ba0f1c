"""
actionfinder command line.

Usage:
    actionfinder seed                        # Generate a synthetic catalog and seed the database
    actionfinder create a new contact        # Print the stored action closest to the text
    actionfinder --log-level DEBUG seed
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from actionfinder.core.config import Settings, get_settings
from actionfinder.core.exceptions import ActionFinderError
from actionfinder.db.session import init_schema
from actionfinder.models.domain import NearestAction
from actionfinder.services.factory import build_services

logger = logging.getLogger(__name__)

SEED_COMMAND = "seed"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="actionfinder",
        description="Seed the app/action catalog or find the action closest to a description",
    )
    parser.add_argument(
        "description",
        nargs="+",
        help=f"'{SEED_COMMAND}' to populate the catalog, otherwise free text describing the action to find",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override LOG_LEVEL",
    )
    args = parser.parse_args(argv)
    args.seed = args.description == [SEED_COMMAND]
    args.query = " ".join(args.description)
    return args


def format_match(match: NearestAction) -> str:
    return (
        f"{match.app_name} / {match.action_name} "
        f"(app_id={match.app_id}, action_id={match.action_id}, distance={match.distance:.4f})\n"
        f"  {match.action_description}"
    )


async def run(args: argparse.Namespace, settings: Settings) -> None:
    services = build_services(settings)
    try:
        if args.seed:
            logger.info("-----")
            report = await services.seed_service.seed()
            logger.info("-----")
            logger.info("Seeding database finish: %d apps, %d actions", report.apps, report.actions)
        else:
            await init_schema(services.engine)
            match = await services.resolver.find_nearest(args.query)
            print(format_match(match))
    finally:
        await _drain_pending_tasks()
        await services.aclose()


async def _drain_pending_tasks() -> None:
    """Let in-flight inserts from a failed seed finish before the engine is disposed."""
    pending = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
    if pending:
        logger.info("Waiting for %d in-flight tasks", len(pending))
        await asyncio.gather(*pending, return_exceptions=True)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(levelname)s: %(message)s",
    )

    try:
        asyncio.run(run(args, settings))
    except ActionFinderError as e:
        logger.error("%s: %s", type(e).__name__, e)
        sys.exit(1)


if __name__ == "__main__":
    main()
