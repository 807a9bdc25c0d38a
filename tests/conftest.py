"""Shared test helpers and fixtures."""

from pathlib import Path

import pytest

from tallyvotes.models import Choice, Contest, Vote

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_contest(contest_id: int, description: str, choices: dict[int, str]) -> Contest:
    """Build a Contest from a compact {choice_id: text} table."""
    return Contest(
        id=contest_id,
        description=description,
        choices=[Choice(id=i, text=t) for i, t in choices.items()],
    )


def make_votes(pairs: list[tuple[int, int]]) -> list[Vote]:
    """Build votes from (contest_id, choice_id) pairs."""
    return [Vote(contest_id=c, choice_id=ch) for c, ch in pairs]


def counts_by_choice(result) -> dict[int, int]:
    """Results of a ContestResult as {choice_id: total_count}, order ignored."""
    return {r.choice_id: r.total_count for r in result.results}


@pytest.fixture
def languages():
    """Contest 1: Rust, Python, Go."""
    return make_contest(1, "Best Programming Language", {1: "Rust", 2: "Python", 3: "Go"})


@pytest.fixture
def editors():
    """Contest 2: Vim, Emacs."""
    return make_contest(2, "Best Editor", {1: "Vim", 2: "Emacs"})


@pytest.fixture
def contests(languages, editors):
    return [languages, editors]


@pytest.fixture
def fixture_bytes():
    """Read a file from tests/fixtures as bytes."""
    def read(name: str) -> bytes:
        return (FIXTURES_DIR / name).read_bytes()
    return read
