"""Tests for loader registry and detection."""

import pytest

from tallyvotes.analyze import load_dataset  # noqa: F401  (registers loaders)
from tallyvotes.loaders import (
    DatasetError,
    detect_loader,
    detect_loader_by_content,
    get_all_loaders,
    get_loader,
)
from tallyvotes.loaders.csv_loader import CsvLoader
from tallyvotes.loaders.json_loader import JsonLoader


class TestDetectLoader:
    def test_registered(self):
        assert set(get_all_loaders()) == {JsonLoader, CsvLoader}

    def test_detects_json_by_name(self):
        assert isinstance(detect_loader("contest.json"), JsonLoader)

    def test_detects_csv_by_name(self):
        assert isinstance(detect_loader("https://example.com/votes.csv"), CsvLoader)

    def test_unknown_extension(self):
        assert detect_loader("votes.txt") is None


class TestDetectLoaderByContent:
    def test_detects_json(self, fixture_bytes):
        loader = detect_loader_by_content(fixture_bytes("votes.json"), "votes")
        assert isinstance(loader, JsonLoader)

    def test_detects_csv(self, fixture_bytes):
        loader = detect_loader_by_content(fixture_bytes("votes.csv"), "votes")
        assert isinstance(loader, CsvLoader)

    def test_returns_none_for_plain_text(self):
        assert detect_loader_by_content(b"hello world", "votes.txt") is None

    def test_returns_none_for_empty_content(self):
        assert detect_loader_by_content(b"", "votes") is None


class TestGetLoader:
    @pytest.mark.parametrize("name, loader_class", [("json", JsonLoader), ("csv", CsvLoader)])
    def test_by_name(self, name, loader_class):
        assert isinstance(get_loader(name), loader_class)

    def test_unknown(self):
        with pytest.raises(DatasetError, match="Unsupported format: xml"):
            get_loader("xml")
