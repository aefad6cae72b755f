"""Shared fixtures for the duoload tests."""

from unittest.mock import patch

import pytest

from duoload import config
from duoload.models import LearningStatus, PageResult, VocabularyCard

# base64 of "Deck:46f2b9ed-abf3-4bd8-a054-68dfa4a4203e"
TEST_DECK_ID = "RGVjazo0NmYyYjllZC1hYmYzLTRiZDgtYTA1NC02OGRmYTRhNDIwM2U="


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep configuration reads and writes inside a temporary directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.delenv(config.API_URL_ENV_VAR, raising=False)
    config.get_config_file_path.cache_clear()
    with patch("duoload.config.get_config_dir", return_value=config_dir):
        yield config_dir
    config.get_config_file_path.cache_clear()


def make_card(word, translation="", example=None, status=LearningStatus.NEW):
    return VocabularyCard(word=word, translation=translation, example=example, status=status)


class FakeSource:
    """Record source that serves prepared pages and remembers its calls."""

    def __init__(self, pages):
        self.pages = list(pages)
        self.calls = []

    def fetch_page(self, deck_id, cursor):
        self.calls.append((deck_id, cursor))
        if not self.pages:
            raise AssertionError("No more test pages available")
        return self.pages.pop(0)


@pytest.fixture
def two_pages():
    """Two pages where the second repeats a word from the first."""
    return [
        PageResult(
            cards=[
                make_card("hello", "hola", status=LearningStatus.NEW),
                make_card("world", "mundo", status=LearningStatus.KNOWN),
            ],
            end_cursor="c1",
            has_next_page=True,
        ),
        PageResult(cards=[make_card("hello", "hola", status=LearningStatus.LEARNING)], has_next_page=False),
    ]
