"""Models for the Duocards GraphQL API."""

from pydantic import BaseModel, ConfigDict, Field

from ..models import LearningStatus

# Cards answered correctly this many times count as known
KNOWN_THRESHOLD = 5

CARDS_QUERY = """
query CardsQuery($deckId: ID!, $first: Int!, $cursor: String) {
  node(id: $deckId) {
    __typename
    ... on Deck {
      id
      cards(first: $first, after: $cursor) {
        edges {
          node {
            id
            front
            back
            hint
            waiting
            knownCount
            __typename
          }
          cursor
        }
        pageInfo {
          endCursor
          hasNextPage
        }
      }
    }
  }
}
""".strip()


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Card(_ApiModel):
    """A card as returned by the Duocards API."""

    id: str = Field(description="Card id")
    front: str = Field(description="The word being learned")
    back: str | None = Field(default="", description="The translation")
    hint: str | None = Field(default=None, description="Optional usage example")
    known_count: int = Field(default=0, alias="knownCount", description="How often the card was known")

    @property
    def learning_status(self) -> LearningStatus:
        if self.known_count >= KNOWN_THRESHOLD:
            return LearningStatus.KNOWN
        if self.known_count > 0:
            return LearningStatus.LEARNING
        return LearningStatus.NEW


class CardEdge(_ApiModel):
    node: Card
    cursor: str | None = None


class PageInfo(_ApiModel):
    end_cursor: str | None = Field(default=None, alias="endCursor")
    has_next_page: bool = Field(default=False, alias="hasNextPage")


class CardConnection(_ApiModel):
    edges: list[CardEdge] = Field(default_factory=list)
    page_info: PageInfo = Field(alias="pageInfo")


class Deck(_ApiModel):
    id: str
    typename: str | None = Field(default=None, alias="__typename")
    cards: CardConnection


class ResponseData(_ApiModel):
    node: Deck | None = None


class GraphQLError(_ApiModel):
    message: str = "Unknown error"


class DuocardsResponse(_ApiModel):
    """Top-level response of the cards query."""

    data: ResponseData | None = None
    errors: list[GraphQLError] = Field(default_factory=list)


class CardsQuery(BaseModel):
    """Request body of the cards query."""

    deck_id: str
    page_size: int
    cursor: str | None = None

    def to_dict(self) -> dict:
        """Convert the query to the JSON body expected by the API."""
        return {
            "operationName": "CardsQuery",
            "query": CARDS_QUERY,
            "variables": {"deckId": self.deck_id, "first": self.page_size, "cursor": self.cursor},
        }
