"""Anki package (.apkg) output for vocabulary cards."""

import logging
import time
from pathlib import Path

import genanki

from ..exceptions import SinkAddError, SinkFinalizeError, UnsupportedDestinationError
from ..models import LearningStatus, VocabularyCard
from .base import Destination, OutputSink, is_stream

logger = logging.getLogger(__name__)

# Fixed IDs so re-imports update the same deck and note type in Anki
MODEL_ID = 1607392319
DECK_ID = 2059400110

DEFAULT_DECK_NAME = "Duocards Vocabulary"
DECK_DESCRIPTION = "Vocabulary imported from Duocards"

STATUS_TAGS = {
    LearningStatus.NEW: "duoload_new",
    LearningStatus.LEARNING: "duoload_learning",
    LearningStatus.KNOWN: "duoload_known",
}

VOCABULARY_MODEL = genanki.Model(
    MODEL_ID,
    "Duoload Vocabulary",
    fields=[{"name": "Front"}, {"name": "Back"}, {"name": "Example"}],
    templates=[
        {
            "name": "Card 1",
            "qfmt": "{{Front}}",
            "afmt": (
                "{{FrontSide}}\n\n<hr id=answer>\n\n{{Back}}\n\n"
                '{{#Example}}<div class="example">{{Example}}</div>{{/Example}}'
            ),
        }
    ],
    css=".card { font-family: arial; font-size: 20px; text-align: center; }\n.example { font-style: italic; }",
)


def card_to_note(card: VocabularyCard) -> genanki.Note:
    """Convert a vocabulary card to an Anki note tagged with its learning status."""
    return genanki.Note(
        model=VOCABULARY_MODEL,
        fields=[card.word, card.translation, card.example or ""],
        tags=[STATUS_TAGS[card.status]],
    )


class AnkiPackageSink(OutputSink):
    """Builds an Anki deck from cards and writes it as an .apkg file.

    Anki packages are zip archives, so only filesystem paths are supported
    as destinations.
    """

    def __init__(self, deck_name: str = DEFAULT_DECK_NAME):
        super().__init__()
        self.deck = genanki.Deck(DECK_ID, deck_name, description=DECK_DESCRIPTION)
        self._start_time = time.monotonic()

    def add(self, card: VocabularyCard) -> bool:
        if self.is_duplicate(card.word):
            logger.debug("Anki deck already has '%s', skipping.", card.word)
            return False

        try:
            note = card_to_note(card)
        except (ValueError, TypeError, KeyError) as e:
            raise SinkAddError(f"Cannot create Anki note for '{card.word}': {e}") from e

        self.deck.add_note(note)
        self._existing_words.add(card.word)
        return True

    def finalize(self, destination: Destination) -> None:
        if is_stream(destination):
            raise UnsupportedDestinationError("Anki output is only supported for file output")

        path = Path(destination)
        logger.debug("Writing Anki package with %d notes to %s.", len(self.deck.notes), path)
        try:
            genanki.Package(self.deck).write_to_file(str(path))
        except Exception as e:
            logger.error("Failed to write deck after %.2f seconds.", time.monotonic() - self._start_time)
            raise SinkFinalizeError(f"Failed to write Anki package {path}: {e}") from e

        logger.info("Deck written successfully in %.2f seconds.", time.monotonic() - self._start_time)
