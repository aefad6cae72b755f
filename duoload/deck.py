"""Deck identifier validation.

Duocards identifies decks by the base64 encoding of ``"Deck:<uuid4>"``.
"""

import base64
import binascii
import logging
import re
import uuid

from .exceptions import InvalidBase64Error, InvalidDeckFormatError, InvalidUuidError, NotUuidV4Error

logger = logging.getLogger(__name__)

DECK_PREFIX = "Deck:"

_HYPHENATED_UUID = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE)
_SIMPLE_UUID = re.compile(r"[0-9a-f]{32}", re.IGNORECASE)
_URN_PREFIX = "urn:uuid:"


def _parse_uuid(text: str) -> uuid.UUID:
    """Parse a UUID in simple, hyphenated, braced or URN form.

    Unlike ``uuid.UUID``, hyphens must be in their standard positions and
    braces or the URN prefix may appear only once.
    """
    wrapped = True
    if text.startswith("{") and text.endswith("}"):
        candidate = text[1:-1]
    elif text.startswith(_URN_PREFIX):
        candidate = text[len(_URN_PREFIX) :]
    else:
        candidate = text
        wrapped = False

    # Braced and URN forms only take the hyphenated layout
    if not (_HYPHENATED_UUID.fullmatch(candidate) or (not wrapped and _SIMPLE_UUID.fullmatch(candidate))):
        raise InvalidUuidError(f"Invalid UUID '{text}'")
    return uuid.UUID(candidate)


def uuid_version(deck_uuid: uuid.UUID) -> int:
    """Return the version nibble of a UUID, whatever its variant."""
    return (deck_uuid.int >> 76) & 0xF


def validate_deck_id(deck_id: str) -> None:
    """Validate a deck identifier.

    Args:
        deck_id: The base64 encoded deck identifier.

    Raises:
        InvalidBase64Error: If the identifier is not canonical standard base64.
        InvalidDeckFormatError: If the decoded bytes are not UTF-8 or lack the 'Deck:' prefix.
        InvalidUuidError: If the remainder is not a UUID.
        NotUuidV4Error: If the UUID is not version 4.
    """
    try:
        decoded = base64.b64decode(deck_id, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidBase64Error(f"Invalid base64 encoding: {e}") from e

    # Rejects unused trailing bits, which b64decode silently drops
    if base64.b64encode(decoded).decode("ascii") != deck_id:
        raise InvalidBase64Error("Invalid base64 encoding: non-canonical last symbol")

    try:
        decoded_str = decoded.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidDeckFormatError(f"Invalid UTF-8 after base64 decode: {e}") from e

    if not decoded_str.startswith(DECK_PREFIX):
        raise InvalidDeckFormatError(f"Missing '{DECK_PREFIX}' prefix")

    deck_uuid = _parse_uuid(decoded_str[len(DECK_PREFIX) :])

    version = uuid_version(deck_uuid)
    if version != 4:
        raise NotUuidV4Error(f"Expected UUID v4, got version {version}")

    logger.debug("Deck ID is valid (deck UUID %s).", deck_uuid)


def encode_deck_id(deck_uuid: uuid.UUID | str) -> str:
    """Build a deck identifier from a deck UUID."""
    return base64.b64encode(f"{DECK_PREFIX}{deck_uuid}".encode()).decode("ascii")
