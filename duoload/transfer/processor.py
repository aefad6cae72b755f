"""Paginated transfer of cards from a record source to an output sink."""

import asyncio
import logging
import time
from typing import Protocol

from ..deck import validate_deck_id
from ..exceptions import TransferError, TransferStage
from ..models import PageResult, TransferStats
from ..output.base import Destination, OutputSink
from .duplicates import DuplicateTracker
from .policy import PageLimitPolicy

logger = logging.getLogger(__name__)

DEFAULT_PAGE_DELAY = 1.0  # seconds between page requests
PROGRESS_LOG_INTERVAL = 100


class RecordSource(Protocol):
    """Anything that can fetch one page of cards of a deck."""

    def fetch_page(self, deck_id: str, cursor: str | None) -> PageResult:
        """Fetch the page after ``cursor`` (the first page when None).

        Raises:
            FetchError: If the page cannot be fetched.
        """
        ...


class TransferProcessor:
    """Moves every card of a deck from a record source into an output sink.

    Pages are fetched strictly one after another with a fixed pause between
    requests. Cards reach the sink in source order; words already seen in
    this transfer are counted as duplicates and never passed on. A processor
    performs a single transfer: it owns its duplicate tracker and statistics.
    """

    def __init__(
        self,
        source: RecordSource,
        sink: OutputSink,
        deck_id: str,
        page_limit: PageLimitPolicy | None = None,
        duplicates: DuplicateTracker | None = None,
        page_delay: float = DEFAULT_PAGE_DELAY,
    ):
        self.source = source
        self.sink = sink
        self.deck_id = deck_id
        self.page_limit = page_limit or PageLimitPolicy()
        self.duplicates = duplicates if duplicates is not None else DuplicateTracker()
        self.page_delay = page_delay
        self.stats = TransferStats()
        self._processed = 0

    async def run(self, destination: Destination) -> TransferStats:
        """Fetch all pages, feed the sink and write its output to ``destination``.

        Raises:
            DeckIdError: If the deck id is malformed. Nothing is fetched.
            TransferError: If fetching, adding a card or writing the output fails.
        """
        validate_deck_id(self.deck_id)

        start_time = time.monotonic()
        cursor = None
        page_number = 0
        try:
            while True:
                page_number += 1
                if not self.page_limit.should_continue(page_number):
                    logger.info("Page limit of %d reached, stopping.", self.page_limit.limit)
                    break

                if page_number > 1:
                    logger.debug("Sleeping for %.2f seconds before next page.", self.page_delay)
                    await asyncio.sleep(self.page_delay)

                page = await self._fetch(page_number, cursor)
                self._process_page(page)

                if not page.has_next_page:
                    logger.info("No more pages to process.")
                    break
                cursor = page.end_cursor

            self._finalize(destination)
        finally:
            self.stats.elapsed_seconds = time.monotonic() - start_time

        logger.info(
            "Transfer finished in %.2f seconds. Pages: %d, cards: %d, duplicates: %d",
            self.stats.elapsed_seconds,
            self.stats.pages_fetched,
            self.stats.total_cards,
            self.stats.duplicates,
        )
        return self.stats

    async def _fetch(self, page_number: int, cursor: str | None) -> PageResult:
        logger.info("Fetching page %d...", page_number)
        try:
            page = await asyncio.to_thread(self.source.fetch_page, self.deck_id, cursor)
        except Exception as e:
            logger.error("Failed to fetch page %d: %s", page_number, e)
            raise TransferError(TransferStage.FETCH, str(e), self.stats) from e

        self.stats.pages_fetched += 1
        logger.info("Page %d fetched with %d cards.", page_number, len(page.cards))
        return page

    def _process_page(self, page: PageResult) -> None:
        for card in page.cards:
            # The card belongs to the sink once added
            word = card.word
            if self.duplicates.remember(word):
                logger.debug("Duplicate word skipped: '%s'", word)
                self.stats.duplicates += 1
                continue

            try:
                added = self.sink.add(card)
            except Exception as e:
                logger.error("Output rejected card '%s': %s", word, e)
                raise TransferError(TransferStage.SINK_ADD, str(e), self.stats) from e
            if added:
                self.stats.total_cards += 1
            else:
                logger.debug("Output declined card '%s'.", word)

            # Counts cards handed to the sink, duplicates excluded
            self._processed += 1
            if self._processed % PROGRESS_LOG_INTERVAL == 0:
                logger.info(
                    "Processed %d cards so far (%d added, %d duplicates).",
                    self._processed,
                    self.stats.total_cards,
                    self.stats.duplicates,
                )

    def _finalize(self, destination: Destination) -> None:
        logger.info("Writing output...")
        try:
            self.sink.finalize(destination)
        except Exception as e:
            logger.error("Failed to write output: %s", e)
            raise TransferError(TransferStage.SINK_FINALIZE, str(e), self.stats) from e
