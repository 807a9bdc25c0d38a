"""Tests for the CSV dataset loader."""

import pytest
from tests.conftest import make_contest

from tallyvotes.loaders.base import DatasetError
from tallyvotes.loaders.csv_loader import CsvLoader
from tallyvotes.models import Vote


class TestCsvLoader:
    def setup_method(self):
        self.loader = CsvLoader()

    def test_name(self):
        assert self.loader.name == "csv"

    def test_load_contests(self, fixture_bytes):
        contests = self.loader.load_contests("contest.csv", fixture_bytes("contest.csv"))
        assert contests == [
            make_contest(1, "Best Programming Language", {1: "Rust", 2: "Python", 3: "Go"}),
            make_contest(2, "Best Editor", {1: "Vim", 2: "Emacs"}),
        ]

    def test_load_votes(self, fixture_bytes):
        votes = self.loader.load_votes("votes.csv", fixture_bytes("votes.csv"))
        assert votes == [Vote(1, 2), Vote(2, 2), Vote(1, 2), Vote(2, 1), Vote(1, 3)]

    def test_interleaved_contest_rows_grouped(self):
        content = (
            b"contest_id,description,choice_id,choice_text\n"
            b"2,Editor,1,Vim\n"
            b"1,Language,1,Rust\n"
            b"2,Editor,2,Emacs\n"
        )
        contests = self.loader.load_contests("c.csv", content)
        assert contests == [
            make_contest(2, "Editor", {1: "Vim", 2: "Emacs"}),
            make_contest(1, "Language", {1: "Rust"}),
        ]

    def test_quoted_fields(self):
        content = (
            b"contest_id,description,choice_id,choice_text\n"
            b'1,"Best Language, 2024",1,"C, the language"\n'
        )
        contest = self.loader.load_contests("c.csv", content)[0]
        assert contest.description == "Best Language, 2024"
        assert contest.choices[0].text == "C, the language"

    def test_byte_order_mark_and_blank_lines(self):
        content = b"\xef\xbb\xbfcontest_id,choice_id\r\n1,1\r\n\r\n1,2\r\n"
        assert self.loader.load_votes("v.csv", content) == [Vote(1, 1), Vote(1, 2)]

    def test_header_only(self):
        assert self.loader.load_votes("v.csv", b"contest_id,choice_id\n") == []

    def test_missing_column(self):
        with pytest.raises(DatasetError, match="missing CSV column\\(s\\): choice_id"):
            self.loader.load_votes("v.csv", b"contest_id,choice\n1,1\n")

    def test_empty_file(self):
        with pytest.raises(DatasetError, match="contest_id, choice_id"):
            self.loader.load_votes("v.csv", b"")

    @pytest.mark.parametrize("value", ["x", "-1", "1.0", ""])
    def test_bad_id(self, value):
        content = f"contest_id,choice_id\n1,1\n1,{value}\n".encode()
        with pytest.raises(DatasetError, match="line 3: 'choice_id'"):
            self.loader.load_votes("v.csv", content)

    def test_short_row(self):
        with pytest.raises(DatasetError, match="line 2: too few fields"):
            self.loader.load_votes("v.csv", b"contest_id,choice_id\n1\n")


class TestCsvDetection:
    def setup_method(self):
        self.loader = CsvLoader()

    def test_can_load(self):
        assert self.loader.can_load("https://example.com/export/votes.CSV")

    def test_cannot_load(self):
        assert not self.loader.can_load("votes.json")

    def test_content_header(self):
        assert self.loader.can_load_content(b"contest_id,choice_id\n1,1\n", "votes")

    def test_content_json(self):
        assert not self.loader.can_load_content(b'[{"contest_id": 1}]', "votes")

    def test_content_json_with_many_records(self):
        content = b'[{"contest_id": 1, "choice_id": 1}, {"contest_id": 1, "choice_id": 2}]'
        assert not self.loader.can_load_content(content, "votes")
