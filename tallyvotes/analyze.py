"""Orchestrator: load contest and vote datasets and tally them."""

from dataclasses import dataclass
from typing import Any

from tallyvotes.loaders import (
    DatasetError,
    DatasetLoader,
    detect_loader,
    detect_loader_by_content,
    get_loader,
)
from tallyvotes.models import Contest, TallyOutcome, Vote
from tallyvotes.sources import SourceError, read_source
from tallyvotes.tally import count_votes
from tallyvotes.tiebreak import DEFAULT_TIEBREAK

# Import loaders to register them
from tallyvotes.loaders import json_loader  # noqa: F401
from tallyvotes.loaders import csv_loader  # noqa: F401

CONTESTS = "contest"
VOTES = "votes"


@dataclass
class TallyReport:
    """Complete tally with the contests it was run against."""
    contests: list[Contest]
    outcome: TallyOutcome
    num_votes: int = 0

    def results_to_list(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self.outcome.results]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "num_contests": len(self.contests),
            "num_votes": self.num_votes,
            "num_rejected": self.outcome.num_rejected,
            "results": self.results_to_list(),
            "rejections": [r.to_dict() for r in self.outcome.rejections],
        }


class TallyError(Exception):
    """Error reading or tallying the input datasets."""
    pass


def tally_sources(
    contests_source: str,
    votes_source: str,
    format: str | None = None,
    tiebreak: str = DEFAULT_TIEBREAK,
    allow_paths: bool = True,
) -> TallyReport:
    """Read both datasets from paths or URLs and tally them.

    Args:
        contests_source: Path or URL of the contest definitions
        votes_source: Path or URL of the votes
        format: Loader name to force for both datasets; detected per
                source when None
        tiebreak: Tie-break policy name
        allow_paths: When False, both sources must be http(s) URLs

    Raises:
        TallyError: If either source cannot be read or decoded, or the
                    tie-break policy is unknown
    """
    contests_content = _read(contests_source, CONTESTS, allow_paths)
    votes_content = _read(votes_source, VOTES, allow_paths)
    contests = load_dataset(contests_source, contests_content, CONTESTS, format)
    votes = load_dataset(votes_source, votes_content, VOTES, format)
    return _run(contests, votes, tiebreak)


def tally_records(
    contest_records: Any,
    vote_records: Any,
    tiebreak: str = DEFAULT_TIEBREAK,
) -> TallyReport:
    """Tally already-decoded JSON records (lists of dicts).

    Raises:
        TallyError: If the records do not have the expected shape
    """
    contests = _build_records(contest_records, Contest.from_dict, CONTESTS)
    votes = _build_records(vote_records, Vote.from_dict, VOTES)
    return _run(contests, votes, tiebreak)


def load_dataset(
    source: str, content: bytes, kind: str, format: str | None = None
) -> list:
    """Decode a contest or votes dataset with the appropriate loader.

    Raises:
        TallyError: If no loader fits or decoding fails
    """
    try:
        loader = _pick_loader(source, content, format)
    except DatasetError as e:
        raise TallyError(str(e)) from e
    if loader is None:
        raise TallyError(
            f"Could not determine the format of {kind} file {source}. "
            f"Supported formats are JSON and CSV."
        )

    try:
        if kind == CONTESTS:
            return loader.load_contests(source, content)
        return loader.load_votes(source, content)
    except DatasetError as e:
        raise TallyError(f"Could not read {kind} file {source}: {e}") from e


def _pick_loader(
    source: str, content: bytes, format: str | None
) -> DatasetLoader | None:
    if format is not None:
        return get_loader(format)
    loader = detect_loader(source)
    if loader is None:
        loader = detect_loader_by_content(content, source)
    return loader


def _read(source: str, kind: str, allow_paths: bool = True) -> bytes:
    try:
        return read_source(source, allow_paths=allow_paths)
    except SourceError as e:
        raise TallyError(f"Could not open {kind} file: {e}") from e


def _build_records(records: Any, build, kind: str) -> list:
    if not isinstance(records, list):
        raise TallyError(f"'{kind}' must be a list")
    built = []
    for index, record in enumerate(records):
        try:
            built.append(build(record))
        except ValueError as e:
            raise TallyError(f"Invalid {kind} record #{index}: {e}") from e
    return built


def _run(contests: list[Contest], votes: list[Vote], tiebreak: str) -> TallyReport:
    try:
        outcome = count_votes(votes, contests, tiebreak)
    except ValueError as e:
        raise TallyError(str(e)) from e
    return TallyReport(contests=contests, outcome=outcome, num_votes=len(votes))
