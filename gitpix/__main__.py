"""Command-line entry point."""

import logging
from pathlib import Path

import click

from gitpix.app import GitPixApp
from gitpix.manager import RepositoryImageClient
from gitpix.remote.client import API_URL, ContentsClient

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "gitpix.log"


def setup_logging(verbose: int, log_file: str) -> None:
    """Setup logging to a file; the terminal belongs to the TUI."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        filename=log_file,
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.command()
@click.option("--api-url", default=API_URL, show_default=True, help="Contents API root")
@click.option(
    "--start-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory the file picker opens in (defaults to the current directory)",
)
@click.option("--log-file", default=DEFAULT_LOG_FILE, show_default=True, help="Log file path")
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
def main(api_url: str, start_dir: Path | None, log_file: str, verbose: int) -> None:
    """Manage image files stored in a GitHub repository folder."""
    setup_logging(verbose, log_file)
    logger.info("Starting gitpix against %s", api_url)
    client = RepositoryImageClient(ContentsClient(base_url=api_url))
    GitPixApp(image_client=client, start_dir=start_dir).run()


if __name__ == "__main__":
    main()
