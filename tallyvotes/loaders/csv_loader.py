"""Loader for CSV contest and vote datasets."""

import csv
import io

from tallyvotes.loaders import register_loader
from tallyvotes.loaders.base import DatasetError, DatasetLoader
from tallyvotes.models import Choice, Contest, Vote

CONTEST_COLUMNS = ("contest_id", "description", "choice_id", "choice_text")
VOTE_COLUMNS = ("contest_id", "choice_id")


@register_loader
class CsvLoader(DatasetLoader):
    """Loader for CSV files with a header row.

    Contests are flattened to one row per choice and regrouped by
    contest_id in first-seen order; the description of a contest is taken
    from its first row:

        contest_id,description,choice_id,choice_text
        1,Best Programming Language,1,Rust
        1,Best Programming Language,2,Python

    Votes are one row per vote:

        contest_id,choice_id
        1,1
    """

    SUFFIXES = (".csv",)

    @property
    def name(self) -> str:
        return "csv"

    def can_load_content(self, content: bytes, source: str) -> bool:
        """Tell-tale sign: a header line naming the contest_id column."""
        first_line = content.lstrip().split(b"\n", 1)[0]
        if first_line[:1] in (b"[", b"{"):
            return False
        return b"," in first_line and b"contest_id" in first_line

    def load_contests(self, source: str, content: bytes) -> list[Contest]:
        descriptions: dict[int, str] = {}
        choices: dict[int, list[Choice]] = {}

        for line_no, row in self._read_rows(source, content, CONTEST_COLUMNS):
            contest_id = self._parse_id(source, line_no, row, "contest_id")
            choice = Choice(
                id=self._parse_id(source, line_no, row, "choice_id"),
                text=row["choice_text"],
            )
            descriptions.setdefault(contest_id, row["description"])
            choices.setdefault(contest_id, []).append(choice)

        return [
            Contest(id=contest_id, description=description,
                    choices=choices[contest_id])
            for contest_id, description in descriptions.items()
        ]

    def load_votes(self, source: str, content: bytes) -> list[Vote]:
        return [
            Vote(
                contest_id=self._parse_id(source, line_no, row, "contest_id"),
                choice_id=self._parse_id(source, line_no, row, "choice_id"),
            )
            for line_no, row in self._read_rows(source, content, VOTE_COLUMNS)
        ]

    @staticmethod
    def _read_rows(
        source: str, content: bytes, columns: tuple[str, ...]
    ) -> list[tuple[int, dict[str, str]]]:
        """Read rows as dicts, paired with their line number in the file."""
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DatasetError(f"{source} is not valid UTF-8: {e}") from e

        reader = csv.DictReader(io.StringIO(text))
        fieldnames = [f.strip() for f in reader.fieldnames or []]
        missing = [c for c in columns if c not in fieldnames]
        if missing:
            raise DatasetError(
                f"{source} is missing CSV column(s): {', '.join(missing)}"
            )
        reader.fieldnames = fieldnames

        rows = []
        try:
            for row in reader:
                if any(row.get(c) is None for c in columns):
                    raise DatasetError(
                        f"{source}: line {reader.line_num}: too few fields"
                    )
                rows.append((reader.line_num, row))
        except csv.Error as e:
            raise DatasetError(f"{source}: line {reader.line_num}: {e}") from e
        return rows

    @staticmethod
    def _parse_id(source: str, line_no: int, row: dict[str, str], key: str) -> int:
        value = row[key].strip()
        if not (value.isascii() and value.isdigit()):
            raise DatasetError(
                f"{source}: line {line_no}: '{key}' must be a "
                f"non-negative integer, got {value!r}"
            )
        return int(value)
