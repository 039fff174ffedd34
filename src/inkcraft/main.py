"""Command-line entry point for operator tasks."""

import argparse
from pathlib import Path

from inkcraft.app_logging import configure_logging
from inkcraft.config import Settings
from inkcraft.migrations import import_stray_images


def main(argv: list[str] | None = None) -> int:
    """Run an operator command and return the exit status."""
    parser = argparse.ArgumentParser(prog="inkcraft")
    commands = parser.add_subparsers(dest="command", required=True)
    migrate = commands.add_parser(
        "migrate", help="Copy stray images into the uploads directory"
    )
    migrate.add_argument("--source", type=Path, default=Path("."))
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logging(settings.log_level)
    if args.command == "migrate":
        copied = import_stray_images(args.source, settings.uploads_dir)
        print(f"Inkcraft: imported {len(copied)} images into {settings.uploads_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
