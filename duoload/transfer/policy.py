class PageLimitPolicy:
    """Optional cap on the number of pages fetched in one transfer."""

    def __init__(self, limit: int | None = None):
        if limit is not None and limit < 1:
            raise ValueError("Page limit must be a positive integer")
        self.limit = limit

    def should_continue(self, page_number: int) -> bool:
        """Return whether the 1-based ``page_number`` may be fetched."""
        if self.limit is None:
            return True
        return page_number <= self.limit

    def __repr__(self) -> str:
        return f"PageLimitPolicy(limit={self.limit!r})"
