"""
Matcher Service - Main entry point.
Ranks active jobs for a registered user from the command line.
"""

import asyncio
from typing import Optional

import click
from loguru import logger

from shared.config import get_settings
from shared.database import Database
from shared.logging_config import setup_logging
from shared.models import MatchResult, UserProfile

from .recommendations import RecommendationAssembler


async def recommend_for_user(
    email: str,
    limit: Optional[int] = None,
) -> list[MatchResult]:
    """
    Build recommendations for the user registered under `email`.

    Args:
        email: Email address of a registered user
        limit: Maximum recommendations (defaults to settings)

    Returns:
        Ranked match results
    """
    settings = get_settings()

    db = Database(settings)
    await db.connect()

    try:
        user_doc = await db.get_user_by_email(email)
        if user_doc is None:
            raise click.ClickException(f"No user registered with {email}")

        profile = UserProfile.model_validate(user_doc)
        assembler = RecommendationAssembler(
            db, limit=limit or settings.recommendations_limit
        )
        return await assembler.recommend(profile)

    finally:
        await db.disconnect()


@click.command()
@click.option("--email", "-e", required=True, help="Email of the user to match")
@click.option(
    "--limit",
    "-l",
    type=int,
    default=None,
    help="Maximum recommendations to show",
)
def main(email: str, limit: Optional[int]):
    """Job Matcher - Ranks active jobs against a user's profile."""
    setup_logging()

    results = asyncio.run(recommend_for_user(email=email, limit=limit))
    if not results:
        logger.warning("No active jobs found")

    for result in results:
        click.echo(
            f"{result.match_percentage:>3}%  {result.title} at {result.company} "
            f"({result.experience}, {result.location}) - "
            f"posted {result.days_since_posted} days ago"
        )


if __name__ == "__main__":
    main()
