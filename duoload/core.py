"""Core functionality for the duoload application."""

import asyncio
import logging
import sys
from enum import Enum
from pathlib import Path

from .config import get_config_value
from .deck import validate_deck_id
from .duocards import DuocardsClient
from .exceptions import TransferError, ValidationError
from .models import TransferStats
from .output import AnkiPackageSink, Destination, JsonOutputSink, OutputSink, is_stream
from .transfer import PageLimitPolicy, RecordSource, TransferProcessor

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Supported export formats."""

    ANKI = "anki"
    JSON = "json"


def create_sink(output_format: OutputFormat) -> OutputSink:
    """Create the output sink for a format."""
    if output_format == OutputFormat.ANKI:
        return AnkiPackageSink(deck_name=get_config_value("deck_name"))
    return JsonOutputSink()


class Duoload:
    """Main application class for duoload."""

    def __init__(
        self,
        deck_id: str,
        output_format: OutputFormat,
        destination: Destination | None = None,
        page_limit: int | None = None,
        client: RecordSource | None = None,
    ):
        """Initialize the application.

        Args:
            deck_id: Base64 encoded Duocards deck identifier
            output_format: Format to export to
            destination: Output file path; None writes JSON to stdout
            page_limit: Maximum number of pages to fetch (default: all)
            client: Record source to fetch from (default: the Duocards API)
        """
        self.deck_id = deck_id
        self.output_format = OutputFormat(output_format)
        if destination is None:
            self.destination = sys.stdout
        elif is_stream(destination):
            self.destination = destination
        else:
            # Validated and written as expanded
            self.destination = Path(destination).expanduser()
        self.page_limit = PageLimitPolicy(page_limit)
        self.client = client if client is not None else DuocardsClient()
        logger.info(
            "Duoload initialized. Format: %s, destination: %s, page limit: %s",
            self.output_format.value,
            self.destination_label,
            self.page_limit.limit or "none",
        )

    @property
    def writes_to_stdout(self) -> bool:
        return is_stream(self.destination)

    @property
    def destination_label(self) -> str:
        return "<stdout>" if self.writes_to_stdout else str(self.destination)

    def validate_setup(self) -> None:
        """Validate the deck id and the destination before any network access.

        Raises:
            ValidationError: If the setup is invalid.
        """
        logger.info("Validating setup...")
        validate_deck_id(self.deck_id)
        logger.debug("Deck ID is valid.")

        if self.writes_to_stdout:
            if self.output_format == OutputFormat.ANKI:
                raise ValidationError("Anki output is only supported for file output")
        else:
            parent = self.destination.resolve().parent
            if not parent.is_dir():
                msg = f"Output directory not found: {parent}"
                logger.error(msg)
                raise ValidationError(msg)

        logger.info("Setup validation successful.")

    def process(self) -> TransferStats:
        """Export the deck to the configured destination.

        Raises:
            DeckIdError: If the deck id is malformed.
            TransferError: If the transfer fails at any stage.
        """
        logger.info("Exporting deck to %s (%s)...", self.destination_label, self.output_format.value)
        processor = TransferProcessor(
            source=self.client,
            sink=create_sink(self.output_format),
            deck_id=self.deck_id,
            page_limit=self.page_limit,
            page_delay=float(get_config_value("page_delay")),
        )
        try:
            return asyncio.run(processor.run(self.destination))
        except TransferError as e:
            logger.error(
                "Transfer aborted during %s after %d cards and %d duplicates.",
                e.stage.value,
                e.stats.total_cards,
                e.stats.duplicates,
            )
            raise

    def close(self) -> None:
        """Release the client's resources."""
        close = getattr(self.client, "close", None)
        if close:
            close()
