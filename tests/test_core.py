"""Tests for the core duoload functionality."""

import io
import json
from unittest.mock import MagicMock, patch

import pytest
from conftest import TEST_DECK_ID, FakeSource, make_card

from duoload.config import set_config_value
from duoload.core import Duoload, OutputFormat, create_sink
from duoload.exceptions import FetchError, InvalidDeckFormatError, TransferError, TransferStage, ValidationError
from duoload.models import LearningStatus, PageResult
from duoload.output import AnkiPackageSink, JsonOutputSink

TOTAL_CARDS = 2


@pytest.fixture(autouse=True)
def no_page_delay():
    """Skip the pause between pages."""
    set_config_value("page_delay", 0.0)


@pytest.fixture
def mock_client():
    return MagicMock()


def test_create_sink():
    assert isinstance(create_sink(OutputFormat.JSON), JsonOutputSink)
    anki_sink = create_sink(OutputFormat.ANKI)
    assert isinstance(anki_sink, AnkiPackageSink)
    assert anki_sink.deck.name == "Duocards Vocabulary"


def test_create_sink_uses_configured_deck_name():
    set_config_value("deck_name", "Spanish")
    assert create_sink(OutputFormat.ANKI).deck.name == "Spanish"


def test_init_defaults_to_stdout(mock_client):
    app = Duoload(TEST_DECK_ID, "json", client=mock_client)

    assert app.output_format == OutputFormat.JSON
    assert app.writes_to_stdout is True
    assert app.destination_label == "<stdout>"
    assert app.page_limit.limit is None


def test_init_with_file(mock_client, tmp_path):
    output_file = tmp_path / "cards.json"
    app = Duoload(TEST_DECK_ID, OutputFormat.JSON, destination=output_file, page_limit=3, client=mock_client)

    assert app.writes_to_stdout is False
    assert app.destination_label == str(output_file)
    assert app.page_limit.limit == 3


def test_init_rejects_invalid_page_limit(mock_client):
    with pytest.raises(ValueError):
        Duoload(TEST_DECK_ID, OutputFormat.JSON, page_limit=0, client=mock_client)


def test_init_creates_duocards_client():
    with patch("duoload.core.DuocardsClient") as mock_client_cls:
        app = Duoload(TEST_DECK_ID, OutputFormat.JSON)

    assert app.client is mock_client_cls.return_value


class TestValidateSetup:
    def test_valid_file_destination(self, mock_client, tmp_path):
        app = Duoload(TEST_DECK_ID, OutputFormat.ANKI, destination=tmp_path / "deck.apkg", client=mock_client)
        app.validate_setup()  # Should not raise

    def test_valid_stdout_json(self, mock_client):
        Duoload(TEST_DECK_ID, OutputFormat.JSON, client=mock_client).validate_setup()

    def test_invalid_deck_id(self, mock_client, tmp_path):
        app = Duoload("aGVsbG8=", OutputFormat.JSON, destination=tmp_path / "out.json", client=mock_client)

        with pytest.raises(InvalidDeckFormatError):
            app.validate_setup()

        mock_client.fetch_page.assert_not_called()

    def test_anki_to_stdout(self, mock_client):
        app = Duoload(TEST_DECK_ID, OutputFormat.ANKI, client=mock_client)

        with pytest.raises(ValidationError, match="only supported for file output"):
            app.validate_setup()

    def test_missing_output_directory(self, mock_client, tmp_path):
        app = Duoload(TEST_DECK_ID, OutputFormat.JSON, destination=tmp_path / "missing" / "out.json", client=mock_client)

        with pytest.raises(ValidationError, match="Output directory not found"):
            app.validate_setup()


def test_process_to_json_file(tmp_path, two_pages):
    output_file = tmp_path / "cards.json"
    app = Duoload(TEST_DECK_ID, OutputFormat.JSON, destination=output_file, client=FakeSource(two_pages))

    stats = app.process()

    assert stats.total_cards == TOTAL_CARDS
    assert stats.duplicates == 1
    assert stats.pages_fetched == 2
    cards = json.loads(output_file.read_text(encoding="utf-8"))
    assert [(card["word"], card["learning_status"]) for card in cards] == [("hello", "new"), ("world", "known")]


def test_process_to_stdout(two_pages, capsys):
    app = Duoload(TEST_DECK_ID, OutputFormat.JSON, client=FakeSource(two_pages))

    app.process()

    assert [card["word"] for card in json.loads(capsys.readouterr().out)] == ["hello", "world"]


def test_process_to_anki_file(tmp_path, two_pages):
    output_file = tmp_path / "deck.apkg"
    app = Duoload(TEST_DECK_ID, OutputFormat.ANKI, destination=output_file, client=FakeSource(two_pages))

    stats = app.process()

    assert stats.total_cards == TOTAL_CARDS
    assert output_file.read_bytes().startswith(b"PK")


def test_process_respects_page_limit(tmp_path):
    pages = [
        PageResult(cards=[make_card("one", status=LearningStatus.NEW)], end_cursor="1", has_next_page=True),
        PageResult(cards=[make_card("two")], has_next_page=False),
    ]
    source = FakeSource(pages)
    app = Duoload(TEST_DECK_ID, OutputFormat.JSON, destination=io.StringIO(), page_limit=1, client=source)

    stats = app.process()

    assert stats.pages_fetched == 1
    assert source.calls == [(TEST_DECK_ID, None)]


def test_process_fetch_failure(mock_client, tmp_path):
    mock_client.fetch_page.side_effect = FetchError("API request failed with status 500", status_code=500)
    output_file = tmp_path / "cards.json"
    app = Duoload(TEST_DECK_ID, OutputFormat.JSON, destination=output_file, client=mock_client)

    with pytest.raises(TransferError) as excinfo:
        app.process()

    assert excinfo.value.stage == TransferStage.FETCH
    assert not output_file.exists()


def test_close_closes_client(mock_client):
    Duoload(TEST_DECK_ID, OutputFormat.JSON, client=mock_client).close()
    mock_client.close.assert_called_once()


def test_close_without_close_method(two_pages):
    # Sources are not required to have a close method
    Duoload(TEST_DECK_ID, OutputFormat.JSON, client=FakeSource(two_pages)).close()


def test_home_relative_destination(monkeypatch, tmp_path, two_pages):
    monkeypatch.setenv("HOME", str(tmp_path))
    app = Duoload(TEST_DECK_ID, OutputFormat.JSON, destination="~/cards.json", client=FakeSource(two_pages))

    app.validate_setup()
    app.process()

    assert app.destination == tmp_path / "cards.json"
    assert len(json.loads((tmp_path / "cards.json").read_text(encoding="utf-8"))) == TOTAL_CARDS
