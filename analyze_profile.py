"""Command line entry point for a single profile analysis.

Usage:
  python analyze_profile.py octocat
  python analyze_profile.py https://github.com/octocat --client-id ci
"""
import argparse
import asyncio
import json
import sys
import logging
from dotenv import load_dotenv
from portfolio_analyzer.application.analysis_service import ANONYMOUS_CLIENT
from portfolio_analyzer.config import Settings
from portfolio_analyzer.wiring import build_analysis_service

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main(argv=None) -> int:
    """Run one analysis and print the response as JSON."""
    parser = argparse.ArgumentParser(description="Score a GitHub profile's hireability")
    parser.add_argument("username", help="GitHub username or profile URL")
    parser.add_argument("--client-id", default=ANONYMOUS_CLIENT, help="Identifier used for rate limiting")
    args = parser.parse_args(argv)

    service = build_analysis_service(Settings.from_env())
    try:
        response = await service.analyze(args.username, args.client_id)
    finally:
        await service.close()

    print(json.dumps(response.to_dict(), indent=2))
    if not response.success:
        logger.error(f"Analysis failed: {response.error}")
        return 1

    result = response.data
    logger.info("=" * 50)
    logger.info(f"  Score: {result.total_score}/100")
    logger.info(f"  Verdict: {result.recruiter_verdict}")
    if result.is_mock_data:
        logger.info("  (demo data: live analysis was unavailable)")
    logger.info("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
