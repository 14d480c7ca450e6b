"""
Seeder - Main entry point.
Loads sample job postings into MongoDB.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

import click
import yaml
from dateutil import parser
from loguru import logger

from shared.config import get_settings
from shared.database import Database
from shared.logging_config import setup_logging
from shared.models import JobPosting

DEFAULT_JOBS_FILE = Path(__file__).parent / "jobs.yaml"


def _posted_date(entry: dict[str, Any], now: datetime) -> datetime:
    if entry.get("postedDate"):
        posted = entry["postedDate"]
        return posted if isinstance(posted, datetime) else parser.isoparse(str(posted))
    return now - timedelta(days=int(entry.get("postedDaysAgo", 0)))


def load_jobs(path: Path = DEFAULT_JOBS_FILE, now: Optional[datetime] = None) -> list[JobPosting]:
    """Load and validate job postings from a YAML file."""
    now = now or datetime.now(timezone.utc)
    with open(path) as f:
        entries = yaml.safe_load(f) or []

    jobs = []
    for entry in entries:
        entry = dict(entry)
        entry["postedDate"] = _posted_date(entry, now)
        entry.pop("postedDaysAgo", None)
        jobs.append(JobPosting.model_validate(entry))

    logger.info(f"Loaded {len(jobs)} jobs from {path}")
    return jobs


async def seed_jobs(path: Path = DEFAULT_JOBS_FILE, clear: bool = False) -> dict[str, int]:
    """
    Insert sample jobs.

    Args:
        path: YAML file with job postings
        clear: Delete existing jobs first

    Returns:
        Job counts per experience tier after seeding
    """
    jobs = load_jobs(path)

    db = Database(get_settings())
    await db.connect()

    try:
        await db.ensure_indexes()

        if clear:
            deleted = await db.clear_jobs()
            logger.info(f"Cleared {deleted} existing jobs")

        inserted = await db.insert_jobs([job.to_db_dict() for job in jobs])
        logger.info(f"Seeded {inserted} jobs")

        summary = await db.count_jobs_by_experience()
        for level, count in sorted(summary.items()):
            logger.info(f"  {level}: {count} jobs")
        return summary

    finally:
        await db.disconnect()


@click.command()
@click.option(
    "--file",
    "-f",
    "jobs_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=DEFAULT_JOBS_FILE,
    help="YAML file with job postings",
)
@click.option("--clear", is_flag=True, help="Delete existing jobs before seeding")
def main(jobs_file: Path, clear: bool):
    """Job Seeder - Loads sample job postings."""
    setup_logging()

    summary = asyncio.run(seed_jobs(jobs_file, clear=clear))
    click.echo(f"Jobs per tier: {summary}")


if __name__ == "__main__":
    main()
