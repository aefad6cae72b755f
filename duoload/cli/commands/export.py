"""Export command handler for the duoload CLI."""

import logging
import sys

from ...core import Duoload, OutputFormat
from ...exceptions import DeckIdError, TransferError, ValidationError
from ..utils.formatters import format_export_summary

logger = logging.getLogger(__name__)


def _get_output_target(args) -> tuple[OutputFormat, str | None]:
    """Map the output options to a format and a file path (None for stdout)."""
    if args.anki_file:
        return OutputFormat.ANKI, args.anki_file
    if args.json_file:
        return OutputFormat.JSON, args.json_file
    return OutputFormat.JSON, None


def handle_export(args):
    """Handle the 'export' command."""
    logger.info("Starting 'export' command.")
    output_format, destination = _get_output_target(args)

    app = None
    try:
        app = Duoload(
            deck_id=args.deck_id,
            output_format=output_format,
            destination=destination,
            page_limit=args.pages,
        )
        app.validate_setup()

        if args.pages:
            logger.info("Exporting to %s (limited to %d pages)...", app.destination_label, args.pages)
        else:
            logger.info("Exporting to %s...", app.destination_label)
        stats = app.process()

        # Keep stdout clean when it carries the JSON document
        summary_stream = sys.stderr if app.writes_to_stdout else sys.stdout
        print(format_export_summary(stats, app.destination_label, args.pages), file=summary_stream)

    except DeckIdError as e:
        logger.critical("Invalid deck ID: %s", e)
        sys.exit(1)
    except ValidationError as e:
        logger.critical("Setup validation failed: %s", e)
        sys.exit(1)
    except TransferError as e:
        logger.critical("Export failed during %s: %s", e.stage.value, e.__cause__ or e)
        sys.exit(1)
    except Exception:
        logger.critical("An unexpected error occurred during export.", exc_info=True)
        sys.exit(1)
    finally:
        if app is not None:
            app.close()
