class DuplicateTracker:
    """Remembers which words have been seen during one transfer."""

    def __init__(self):
        self._seen: set[str] = set()

    def remember(self, word: str) -> bool:
        """Record a word.

        Returns:
            True if the word was seen before (a duplicate), False on first sight.
        """
        if word in self._seen:
            return True
        self._seen.add(word)
        return False

    def __contains__(self, word: str) -> bool:
        return word in self._seen

    def __len__(self) -> int:
        return len(self._seen)
