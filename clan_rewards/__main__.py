"""Entry point for the clan rewards report"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from clan_rewards.config import settings
from clan_rewards.report import ClanRewardsReport, RunLogAdapter

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Report which weekly clan rewards a Destiny 2 clan earned')
    parser.add_argument('--apikey', default=settings.BUNGIE_API_KEY, help='The Bungie API key')
    parser.add_argument('--user', default=settings.BUNGIE_USERNAME, help='The user to query')
    parser.add_argument('--verbose', action='store_true', default=settings.VERBOSE, help='Enable verbose output')

    args = parser.parse_args(argv)
    if not args.apikey:
        parser.error('an API key is required (--apikey or BUNGIE_API_KEY)')
    if not args.user:
        parser.error('a user is required (--user or BUNGIE_USERNAME)')
    return args


def run(argv: Optional[List[str]] = None) -> None:
    """Generate the report for the configured user's clan."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(message)s'
    )

    try:
        run_settings = settings.model_copy(update={
            'BUNGIE_API_KEY': args.apikey,
            'BUNGIE_USERNAME': args.user,
            'VERBOSE': args.verbose
        })

        # Log config (excluding sensitive data)
        safe_config = run_settings.model_dump(exclude={'BUNGIE_API_KEY'})
        logger.info("Using configuration:")
        logger.info(json.dumps(safe_config, indent=2))

        report = ClanRewardsReport(run_settings, log=RunLogAdapter(logger, {'run': args.user}))
        print(report.render(args.user))

    except Exception as e:
        logger.error(f"Error generating clan rewards report: {e}")
        logger.debug("Traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
