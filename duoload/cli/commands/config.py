"""Configuration command handler for the duoload CLI."""

import logging
import platform
import sys

from ...config import (
    DEFAULT_CONFIG,
    coerce_config_value,
    get_config_file_path,
    list_config,
    set_config_value,
)
from ..utils.formatters import format_config

logger = logging.getLogger(__name__)


def handle_configure(args):
    """Handle the 'config' command and its subcommands."""
    if not getattr(args, "config_command", None):
        # Default to 'show' if no subcommand specified
        args.config_command = "show"

    if args.config_command == "show":
        handle_config_show(args)
    elif args.config_command == "set":
        handle_config_set(args)
    elif args.config_command == "paths":
        handle_config_paths(args)
    else:
        logger.error("Unknown config subcommand: %s", args.config_command)
        sys.exit(1)


def handle_config_show(_):
    """Show current configuration."""
    logger.info("Showing current configuration")
    print(format_config(list_config()))
    print(f"\nConfiguration file: {get_config_file_path()}")


def handle_config_set(args):
    """Set a configuration value."""
    try:
        value = coerce_config_value(args.key, args.value)
    except KeyError:
        logger.error("Unknown configuration key: %s", args.key)
        print(f"Error: Unknown configuration key: {args.key}")
        print(f"Valid keys are: {', '.join(DEFAULT_CONFIG)}")
        sys.exit(1)
    except ValueError as e:
        logger.error("Invalid value for %s: %s", args.key, args.value)
        print(f"Error: Invalid value for {args.key}: {e}")
        sys.exit(1)

    if set_config_value(args.key, value):
        logger.info("Configuration value set: %s = %s", args.key, value)
        print(f"Configuration updated: {args.key} = {value}")
    else:
        logger.error("Failed to set configuration value: %s", args.key)
        print("Error: Failed to update configuration.")
        sys.exit(1)


def handle_config_paths(_):
    """Show configuration paths."""
    print("\n--- Application Paths ---")
    config_file = get_config_file_path()
    print(f"Configuration directory: {config_file.parent}")
    print(f"Configuration file: {config_file}")
    print(f"Detected platform: {platform.system() or sys.platform}")
