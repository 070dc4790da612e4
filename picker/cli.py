"""CLI entry point for the version picker.

Supports two modes:
1. Interactive mode: choose a release channel, then a version, from numbered
   menus (interactive_mode: true in config, or --interactive)
2. CLI mode: answer a single lookup for scripts (--cli, --version, --latest,
   --list)
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

# Ensure parent directory is in path for direct script execution
if __package__ is None or __package__ == "":
    sys.path.append(str(Path(__file__).resolve().parents[1]))

from manifest.catalog import Catalog
from manifest.client import load_catalog
from manifest.core.config import get_general_config
from manifest.errors import ManifestError
from manifest.model import Channel
from picker.console_ui import ConsoleInput, ConsoleUI, InputSource
from picker.mode_selector import run_with_mode_detection
from picker.selector import display, select_version

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def create_cli_parser() -> argparse.ArgumentParser:
    """Create argument parser.

    Returns:
        Configured ArgumentParser for both modes
    """
    parser = argparse.ArgumentParser(
        description="Version Picker - browse a release manifest and pick a version",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pick a version from the menus
  version-picker --interactive

  # Resolve a version id (falls back to the newest version if unknown)
  version-picker --version 1.20.1

  # Fail instead of falling back
  version-picker --version 1.20.1 --strict

  # List all snapshots
  version-picker --list snapshot
        """
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to JSON config file (default: $VERSION_PICKER_CONFIG_PATH or config.json)."
    )

    parser.add_argument(
        "--url",
        default=None,
        help="Manifest URL (overrides manifest.url from the config)."
    )

    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (overrides general.log_level from the config)."
    )

    lookup = parser.add_argument_group("CLI lookups")
    lookup.add_argument(
        "--version",
        metavar="ID",
        default=None,
        help="Show the version with this id."
    )
    lookup.add_argument(
        "--strict",
        action="store_true",
        help="With --version, fail when the id is unknown instead of using the newest version."
    )
    lookup.add_argument(
        "--latest",
        action="store_true",
        help="Show the newest version listed in the manifest."
    )
    lookup.add_argument(
        "--list",
        dest="list_channel",
        metavar="CHANNEL",
        choices=[channel.value for channel in Channel],
        default=None,
        help="List the version ids of one channel (release, snapshot, old_beta, old_alpha)."
    )

    # Mode override flags
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Force interactive mode regardless of config setting."
    )

    parser.add_argument(
        "--cli",
        action="store_true",
        help="Force CLI mode regardless of config setting."
    )

    return parser


def configure_logging(level_name: Optional[str] = None) -> None:
    """Configure base logging from the CLI flag or the config."""
    level_name = (level_name or get_general_config().get("log_level") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # Reduce noisy retry logs from urllib3
    logging.getLogger("urllib3").setLevel(logging.ERROR)
    logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)


def print_summary(catalog: Catalog) -> None:
    """Print the number of versions per channel and the newest version."""
    ConsoleUI.print_header("VERSION MANIFEST", f"{len(catalog)} versions")
    for channel, count in catalog.counts().items():
        ConsoleUI.print_info(channel.label, f"{count} versions")
    print()
    ConsoleUI.print_info("Latest", display(catalog.get_most_recent()))


def run_cli(args: argparse.Namespace, catalog: Catalog) -> int:
    """Answer one CLI lookup.

    Args:
        args: Parsed command-line arguments
        catalog: Classified manifest

    Returns:
        Process exit status
    """
    if args.version:
        if args.strict:
            entry = catalog.find_exact(args.version)
            if entry is None:
                ConsoleUI.print_error(f"Version {args.version!r} is not in the manifest")
                return 1
        else:
            entry = catalog.find_by_identifier(args.version)
            if entry.identifier != args.version:
                ConsoleUI.print_warning(
                    f"Version {args.version!r} is not in the manifest; showing the newest version"
                )
        ConsoleUI.print_entry(entry, display(entry))
        return 0

    if args.latest:
        entry = catalog.get_most_recent()
        ConsoleUI.print_entry(entry, display(entry))
        return 0

    if args.list_channel:
        channel = Channel.parse(args.list_channel)
        entries = catalog.list_channel(channel)
        if not entries:
            ConsoleUI.print_warning(f"No {channel.label.lower()} versions in the manifest")
        for entry in entries:
            print(entry.identifier)
        return 0

    print_summary(catalog)
    return 0


def run_interactive(catalog: Catalog, source: Optional[InputSource] = None) -> int:
    """Run the channel/version menus and print the chosen version.

    Args:
        catalog: Classified manifest
        source: Answer source (defaults to the terminal)

    Returns:
        Process exit status
    """
    ConsoleUI.enable_ansi()
    ConsoleUI.print_header("VERSION PICKER", f"{len(catalog)} versions available")
    entry = select_version(catalog, source or ConsoleInput())
    logger.info("Selected %s", display(entry))
    ConsoleUI.print_entry(entry, display(entry))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point supporting both interactive and CLI modes."""
    try:
        _, interactive_mode, args = run_with_mode_detection(
            parser_factory=create_cli_parser,
            script_name="version-picker",
            argv=argv,
            setup_logging=lambda parsed: configure_logging(parsed.log_level),
        )

        catalog = load_catalog(args.url)
        if interactive_mode:
            status = run_interactive(catalog)
        else:
            status = run_cli(args, catalog)
        sys.exit(status)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(0)
    except ManifestError as e:
        logger.error("%s", e)
        ConsoleUI.print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
