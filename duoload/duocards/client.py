import logging

import requests
from pydantic import ValidationError as PydanticValidationError

from .. import __version__
from ..config import get_config_value
from ..deck import validate_deck_id
from ..exceptions import FetchError
from ..models import PageResult, VocabularyCard
from .models import CardsQuery, DuocardsResponse

logger = logging.getLogger(__name__)


class DuocardsClient:
    """Client for the Duocards GraphQL API.

    Fetches the cards of a deck one page at a time.
    """

    # HTTP status codes
    HTTP_OK = 200

    USER_AGENT = f"duoload/{__version__}"

    def __init__(
        self,
        api_url: str | None = None,
        page_size: int | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the Duocards API client.

        Args:
            api_url: GraphQL endpoint (default: from config)
            page_size: Number of cards requested per page (default: from config)
            timeout: Request timeout in seconds (default: from config)
            session: Optional requests session to reuse
        """
        self.api_url = api_url or get_config_value("api_url")
        self.page_size = int(page_size or get_config_value("page_size"))
        self.timeout = float(timeout or get_config_value("request_timeout"))
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept-Encoding": "gzip, deflate",
                "User-Agent": self.USER_AGENT,
            }
        )
        logger.debug(
            "Initialized DuocardsClient (url=%s, page_size=%d, timeout=%.1fs).",
            self.api_url,
            self.page_size,
            self.timeout,
        )

    def fetch_page(self, deck_id: str, cursor: str | None = None) -> PageResult:
        """Fetch one page of cards.

        Args:
            deck_id: Base64 encoded deck identifier
            cursor: Cursor returned with the previous page, None for the first page

        Returns:
            The cards of the page and the pagination state

        Raises:
            DeckIdError: If the deck id is malformed
            FetchError: If the request fails or the response cannot be understood
        """
        validate_deck_id(deck_id)
        response = self._post_query(CardsQuery(deck_id=deck_id, page_size=self.page_size, cursor=cursor))

        deck = response.data.node
        cards = self.convert_to_vocabulary_cards(response)
        page_info = deck.cards.page_info
        logger.debug(
            "Received %d cards (has_next_page=%s, end_cursor=%s).",
            len(cards),
            page_info.has_next_page,
            page_info.end_cursor,
        )
        return PageResult(cards=cards, end_cursor=page_info.end_cursor, has_next_page=page_info.has_next_page)

    def _post_query(self, query: CardsQuery) -> DuocardsResponse:
        """Send the cards query and parse the response."""
        logger.debug("Requesting %d cards after cursor %s.", query.page_size, query.cursor)
        try:
            response = self.session.post(self.api_url, json=query.to_dict(), timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Network error fetching cards.", exc_info=True)
            raise FetchError(f"Request to {self.api_url} failed: {e}") from e

        if response.status_code != self.HTTP_OK:
            logger.error(
                "Error fetching cards. Status: %d, Response: %s",
                response.status_code,
                response.text[:500],  # Log truncated response
            )
            raise FetchError(
                f"API request failed with status {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            parsed = DuocardsResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error("Unexpected response from Duocards: %s", response.text[:500])
            raise FetchError(f"Malformed API response: {e}") from e

        if parsed.errors:
            messages = "; ".join(error.message for error in parsed.errors)
            raise FetchError(f"API returned errors: {messages}")
        if parsed.data is None or parsed.data.node is None:
            raise FetchError("Deck not found")
        return parsed

    def convert_to_vocabulary_cards(self, response: DuocardsResponse) -> list[VocabularyCard]:
        """Convert an API response to vocabulary cards, keeping the page order."""
        if response.data is None or response.data.node is None:
            return []

        cards = []
        for edge in response.data.node.cards.edges:
            node = edge.node
            if not node.front:
                logger.warning("Skipping card %s without a front side.", node.id)
                continue
            cards.append(
                VocabularyCard(
                    word=node.front,
                    translation=node.back or "",
                    example=node.hint or None,
                    status=node.learning_status,
                )
            )
        return cards

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
