"""
API Service - Main entry point.
Serves the FastAPI application with uvicorn.
"""

from typing import Optional

import click
import uvicorn
from loguru import logger

from shared.config import get_settings
from shared.logging_config import setup_logging

from .app import create_app


@click.command()
@click.option("--host", default=None, help="Bind address (defaults to API_HOST)")
@click.option("--port", "-p", type=int, default=None, help="Port (defaults to API_PORT)")
def main(host: Optional[str], port: Optional[int]) -> None:
    """Run the Career Coach API server."""
    settings = get_settings()
    setup_logging(settings, intercept_stdlib=True)

    host = host or settings.api_host
    port = port or settings.api_port
    logger.info(f"Starting API on {host}:{port}")

    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
