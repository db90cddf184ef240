from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from .config import load_config
from .exceptions import RepositoryListingError
from .manifest import write_manifest
from .scraper import collect_projects

LOG_FORMAT = "<level>{level: <8}</level> | {message}"


def setup_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level, colorize=None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portfolio-manifest",
        description="Write a JSON manifest of a GitHub account's public, non-fork repositories.",
    )
    parser.add_argument("--owner", help="GitHub account whose repositories are listed")
    parser.add_argument("--out", type=Path, help="Path of the JSON manifest (default: projects.json)")
    return parser


def app(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config.logging.level)
    owner = args.owner or config.output.owner
    out_path = args.out or config.output.path

    logger.info(f"Generating project manifest for {owner}")
    try:
        records = collect_projects(owner, config)
    except RepositoryListingError as exc:
        logger.error(f"Failed to list repositories: {exc}")
        return 1

    manifest_path = write_manifest(records, out_path)
    print(f"Manifest written: {manifest_path}")
    return 0


def main() -> None:
    sys.exit(app(sys.argv[1:]))


if __name__ == "__main__":  # pragma: no cover
    main()
