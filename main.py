"""Main entry point for the helperkit startup check."""

import argparse
import asyncio
import sys

from loguru import logger

from helperkit.core.config import Settings, get_settings
from helperkit.core.context import correlation_scope
from helperkit.core.exceptions import ConfigurationError, TransportError
from helperkit.core.logging import setup_logging
from helperkit.http.pipeline import RequestPipeline, create_pipeline
from helperkit.storage.store import create_store


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Start helperkit and optionally send one request to the backend."
    )
    parser.add_argument(
        "path", nargs="?", help="Backend path to request, e.g. /v1/health"
    )
    parser.add_argument(
        "--method", default="GET", help="HTTP method for the request (default: GET)"
    )
    return parser.parse_args(argv)


async def run(path: str | None, method: str) -> int:
    """Build the pipeline and send the optional request.

    Raises:
        ConfigurationError: If no backend URL is configured.
    """
    settings = get_settings()
    store = create_store(settings.storage_config)

    with correlation_scope():
        async with create_pipeline(settings, store) as pipeline:
            return await send(pipeline, settings, path, method)


async def send(
    pipeline: RequestPipeline, settings: Settings, path: str | None, method: str
) -> int:
    """Announce readiness and send the optional request."""
    logger.info(
        f"{settings.app_name} v{settings.app_version} ready "
        f"({settings.environment}), backend {pipeline.base_url}"
    )
    if path is None:
        return 0

    try:
        response = await pipeline.request(path, {"method": method})
    except TransportError as e:
        logger.error(f"Request to {path} failed: {e}")
        return 1

    logger.info(f"{method.upper()} {path} -> {response.status}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for helperkit."""
    args = parse_args(argv)
    settings = get_settings()

    # Setup logging first
    setup_logging(settings)

    try:
        return asyncio.run(run(args.path, args.method))
    except ConfigurationError as e:
        logger.critical(f"Startup failed: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
