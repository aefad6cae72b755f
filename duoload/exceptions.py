"""Exceptions for the duoload application."""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import TransferStats


class DuoloadError(Exception):
    """Base class for all application errors."""

    pass


class ValidationError(DuoloadError):
    """Error raised when validation fails."""

    pass


class DeckIdError(ValidationError):
    """Error raised when a deck identifier is malformed."""

    pass


class InvalidBase64Error(DeckIdError):
    """The deck identifier is not valid standard base64."""

    pass


class InvalidDeckFormatError(DeckIdError):
    """The decoded deck identifier is not UTF-8 text starting with 'Deck:'."""

    pass


class InvalidUuidError(DeckIdError):
    """The part after 'Deck:' is not a UUID."""

    pass


class NotUuidV4Error(DeckIdError):
    """The deck UUID is not a version 4 (random) UUID."""

    pass


class FetchError(DuoloadError):
    """Error raised when a page of cards cannot be fetched."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SinkError(DuoloadError):
    """Base class for output sink errors."""

    pass


class SinkAddError(SinkError):
    """Error raised when a sink fails to accept a card."""

    pass


class SinkFinalizeError(SinkError):
    """Error raised when a sink fails to write its output."""

    pass


class UnsupportedDestinationError(SinkFinalizeError):
    """Error raised when a sink cannot write to the given kind of destination."""

    pass


class TransferStage(str, Enum):
    """Pipeline stage in which a transfer failed."""

    FETCH = "fetch"
    SINK_ADD = "sink-add"
    SINK_FINALIZE = "sink-finalize"


class TransferError(DuoloadError):
    """Error raised when a transfer aborts.

    The underlying error is available as ``__cause__``. ``stats`` holds the
    counters accumulated before the failure; they do not describe a finished
    transfer.
    """

    def __init__(self, stage: TransferStage, message: str, stats: "TransferStats"):
        super().__init__(message)
        self.stage = stage
        self.stats = stats

    def __str__(self) -> str:
        return f"{self.stage.value} failed: {super().__str__()}"
