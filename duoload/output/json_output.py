"""JSON output for vocabulary cards."""

import json
import logging
import time
from pathlib import Path
from typing import IO, Any

from ..exceptions import SinkFinalizeError
from ..models import VocabularyCard
from .base import Destination, OutputSink, is_stream

logger = logging.getLogger(__name__)


class JsonOutputSink(OutputSink):
    """Collects cards and writes them as a pretty-printed JSON array.

    Each entry has ``word``, ``translation``, ``example`` (or null) and
    ``learning_status``. Cards are written in the order they were accepted.
    Paths and text streams (including stdout) are both supported.
    """

    def __init__(self):
        super().__init__()
        self._cards: list[dict[str, Any]] = []
        self._start_time = time.monotonic()

    def add(self, card: VocabularyCard) -> bool:
        if self.is_duplicate(card.word):
            logger.debug("JSON output already has '%s', skipping.", card.word)
            return False

        self._cards.append(
            {
                "word": card.word,
                "translation": card.translation,
                "example": card.example,
                "learning_status": card.status.value,
            }
        )
        self._existing_words.add(card.word)
        return True

    def finalize(self, destination: Destination) -> None:
        if is_stream(destination):
            logger.debug("Writing %d cards as JSON to stream.", len(self._cards))
            self._write(destination)
        else:
            path = Path(destination)
            logger.debug("Writing %d cards as JSON to %s.", len(self._cards), path)
            try:
                with open(path, "w", encoding="utf-8") as f:
                    self._write(f)
            except (OSError, ValueError) as e:
                raise SinkFinalizeError(f"Failed to create JSON file {path}: {e}") from e

        logger.info("JSON written successfully in %.2f seconds.", time.monotonic() - self._start_time)

    def _write(self, stream: IO[str]) -> None:
        try:
            json.dump(self._cards, stream, indent=2, ensure_ascii=False)
            stream.write("\n")
            stream.flush()
        except (OSError, ValueError, TypeError) as e:
            raise SinkFinalizeError(f"Failed to write JSON: {e}") from e
