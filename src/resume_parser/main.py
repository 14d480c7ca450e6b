"""
Resume Parser - Main entry point.
Parses a local PDF resume and prints the extracted data as JSON.
"""

import asyncio
import json
from pathlib import Path

import click
from loguru import logger

from shared.config import get_settings
from shared.logging_config import setup_logging

from .extractor import ResumeExtractor
from .fallback import extract_basic_info
from .pdf import PDF_CONTENT_TYPE, extract_text_from_pdf, validate_pdf_upload


@click.command()
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--no-ai",
    is_flag=True,
    help="Skip the LLM and use keyword extraction only",
)
def main(pdf_path: Path, no_ai: bool):
    """Resume Parser - Extracts skills, projects and education from a PDF."""
    settings = get_settings()
    setup_logging(settings)

    if no_ai:
        pdf_bytes = validate_pdf_upload(
            pdf_path.read_bytes(),
            PDF_CONTENT_TYPE,
            filename=pdf_path.name,
            max_bytes=settings.resume_max_bytes,
        )
        data, used_ai = extract_basic_info(extract_text_from_pdf(pdf_bytes)), False
    else:
        data, used_ai = asyncio.run(
            ResumeExtractor(settings=settings).extract_from_upload(
                pdf_path.read_bytes(),
                PDF_CONTENT_TYPE,
                filename=pdf_path.name,
            )
        )

    logger.info(f"Parsed {pdf_path.name} ({'AI' if used_ai else 'fallback'} extraction)")
    click.echo(json.dumps(data.to_api(), indent=2))


if __name__ == "__main__":
    main()
