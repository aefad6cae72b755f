"""Command-line argument parsers for duoload."""

import argparse

from .. import __version__


def positive_int(value: str) -> int:
    """Argument type for page limits."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("Page limit must be a valid positive integer") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("Page limit must be a positive integer")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all subcommands."""
    parser = argparse.ArgumentParser(description="Transfer vocabulary from Duocards to Anki or JSON.", prog="duoload")

    _setup_global_options(parser)

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    _setup_export_command(subparsers)
    _setup_config_command(subparsers)
    _setup_version_command(subparsers)

    return parser


def _setup_global_options(parser):
    """Set up global options for the CLI."""
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}", help="Show program's version number and exit."
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level (default: from config, INFO).",
    )
    parser.add_argument(
        "--log-file", type=str, default=None, help="Log output to a specified file in addition to the console."
    )


def _setup_export_command(subparsers):
    """Set up the export command and its options."""
    from .commands.export import handle_export

    parser_export = subparsers.add_parser("export", help="Export a Duocards deck to Anki or JSON")
    parser_export.add_argument(
        "--deck-id", required=True, metavar="DECK_ID", help="Duocards deck ID (base64 encoded Deck:UUID)"
    )

    output_group = parser_export.add_mutually_exclusive_group(required=True)
    output_group.add_argument("--anki-file", metavar="FILE", help="Output Anki package file (.apkg)")
    output_group.add_argument("--json-file", metavar="FILE", help="Output JSON file (.json)")
    output_group.add_argument(
        "--json", action="store_true", help="Output JSON to stdout (for piping to other tools)"
    )

    parser_export.add_argument(
        "--pages", type=positive_int, metavar="N", help="Limit export to N pages (default: all pages)"
    )
    parser_export.set_defaults(func=handle_export)


def _setup_config_command(subparsers):
    """Set up the config command and its subcommands."""
    from .commands.config import handle_configure

    parser_config = subparsers.add_parser("config", help="Configure the application")
    config_subparsers = parser_config.add_subparsers(dest="config_command", help="Configuration commands")

    parser_config_show = config_subparsers.add_parser("show", help="Show current configuration")
    parser_config_show.set_defaults(func=handle_configure)

    parser_config_set = config_subparsers.add_parser("set", help="Set a configuration value")
    parser_config_set.add_argument("key", type=str, help="Configuration key to set")
    parser_config_set.add_argument("value", type=str, help="Value to set")
    parser_config_set.set_defaults(func=handle_configure)

    parser_config_paths = config_subparsers.add_parser("paths", help="Show configuration paths")
    parser_config_paths.set_defaults(func=handle_configure)

    parser_config.set_defaults(func=handle_configure)


def _setup_version_command(subparsers):
    """Set up the version command."""
    from .commands.version import handle_version

    parser_version = subparsers.add_parser("version", help="Show version information")
    parser_version.set_defaults(func=handle_version)
