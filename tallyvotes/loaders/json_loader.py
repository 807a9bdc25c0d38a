"""Loader for JSON contest and vote datasets."""

import json
from typing import Any, Callable, TypeVar

from tallyvotes.loaders import register_loader
from tallyvotes.loaders.base import DatasetError, DatasetLoader
from tallyvotes.models import Contest, Vote

T = TypeVar("T")


@register_loader
class JsonLoader(DatasetLoader):
    """Loader for JSON documents.

    Both datasets are top-level arrays of records:

        [{"id": 1, "description": "Best Programming Language",
          "choices": [{"id": 1, "text": "Rust"}, {"id": 2, "text": "Python"}]}]

        [{"contest_id": 1, "choice_id": 1}, {"contest_id": 1, "choice_id": 2}]
    """

    SUFFIXES = (".json",)

    @property
    def name(self) -> str:
        return "json"

    def can_load_content(self, content: bytes, source: str) -> bool:
        """A JSON dataset starts with an array."""
        return content.lstrip()[:1] == b"["

    def load_contests(self, source: str, content: bytes) -> list[Contest]:
        return self._load_records(source, content, Contest.from_dict, "contest")

    def load_votes(self, source: str, content: bytes) -> list[Vote]:
        return self._load_records(source, content, Vote.from_dict, "vote")

    @staticmethod
    def _load_records(
        source: str, content: bytes, build: Callable[[Any], T], kind: str
    ) -> list[T]:
        try:
            data = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DatasetError(f"{source} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise DatasetError(
                f"{source} must contain a JSON array of {kind}s, "
                f"got {type(data).__name__}"
            )

        records = []
        for index, item in enumerate(data):
            try:
                records.append(build(item))
            except ValueError as e:
                raise DatasetError(f"{source}: {kind} #{index}: {e}") from e
        return records
