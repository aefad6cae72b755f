"""Core data models for duoload."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LearningStatus(str, Enum):
    """How well the user knows a card."""

    NEW = "new"
    LEARNING = "learning"
    KNOWN = "known"


class VocabularyCard(BaseModel):
    """A single vocabulary flashcard."""

    model_config = ConfigDict(frozen=True)

    word: str = Field(min_length=1, description="The term being learned; used as the duplicate key")
    translation: str = Field(description="Translation of the word")
    example: str | None = Field(default=None, description="Optional usage example")
    status: LearningStatus = Field(default=LearningStatus.NEW, description="Learning status of the card")


class PageResult(BaseModel):
    """One page of cards returned by a record source."""

    cards: list[VocabularyCard] = Field(default_factory=list, description="Cards in source order")
    end_cursor: str | None = Field(default=None, description="Cursor for requesting the next page")
    has_next_page: bool = Field(default=False, description="Whether the source has more pages")


class TransferStats(BaseModel):
    """Statistics for a transfer."""

    total_cards: int = Field(default=0, description="Number of cards accepted by the output")
    duplicates: int = Field(default=0, description="Number of repeated words skipped")
    pages_fetched: int = Field(default=0, description="Number of pages fetched from the source")
    elapsed_seconds: float = Field(default=0.0, description="Wall-clock duration of the transfer")
