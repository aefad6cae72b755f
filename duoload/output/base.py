"""Output sink interface."""

from abc import ABC, abstractmethod
from os import PathLike
from typing import IO, Union

from ..models import VocabularyCard

# A filesystem path or an open, writable stream
Destination = Union[str, PathLike, IO]


def is_stream(destination: Destination) -> bool:
    """Return True if the destination is an open stream rather than a path."""
    return hasattr(destination, "write")


class OutputSink(ABC):
    """Accumulates accepted cards and writes them out at the end of a transfer.

    Sinks keep their own record of accepted words and reject repeats, so
    they stay consistent when fed directly without the transfer pipeline's
    duplicate tracking in front of them.
    """

    def __init__(self):
        self._existing_words: set[str] = set()

    @abstractmethod
    def add(self, card: VocabularyCard) -> bool:
        """Accept a card.

        Returns:
            True if the card was added, False if the sink rejected it as a duplicate.

        Raises:
            SinkAddError: If the card cannot be added.
        """

    @abstractmethod
    def finalize(self, destination: Destination) -> None:
        """Write all accepted cards to a path or stream.

        Raises:
            UnsupportedDestinationError: If the sink cannot write to this kind of destination.
            SinkFinalizeError: If writing fails.
        """

    def is_duplicate(self, word: str) -> bool:
        """Return True if a card with this word was already accepted."""
        return word in self._existing_words

    def __len__(self) -> int:
        return len(self._existing_words)
