"""Core data models for contests, votes and tally results."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Self


def _require_id(data: dict[str, Any], key: str) -> int:
    """Read a non-negative integer id from a record, raising ValueError otherwise."""
    if key not in data:
        raise ValueError(f"missing '{key}'")
    value = data[key]
    # bool is a subclass of int, but true/false are not ids
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"'{key}' must not be negative, got {value}")
    return value


def _require_str(data: dict[str, Any], key: str) -> str:
    if key not in data:
        raise ValueError(f"missing '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {value!r}")
    return value


def _require_record(data: Any, kind: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{kind} must be an object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class Choice:
    """A selectable option within a contest.

    Example:
        >>> Choice.from_dict({"id": 1, "text": "Rust"})
        Choice(id=1, text='Rust')
    """
    id: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text}

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        data = _require_record(data, "choice")
        return cls(id=_require_id(data, "id"), text=_require_str(data, "text"))


@dataclass(frozen=True)
class Contest:
    """A named decision with a fixed, ordered set of choices.

    Attributes:
        id: Contest identifier referenced by votes
        description: Human-readable name of the contest
        choices: Choices in the order they appear on the ballot. Choice ids
                 are expected to be unique; lookups return the first match.

    Example:
        >>> contest = Contest.from_dict({
        ...     "id": 1,
        ...     "description": "Best Programming Language",
        ...     "choices": [
        ...         {"id": 1, "text": "Rust"},
        ...         {"id": 2, "text": "Python"},
        ...         {"id": 3, "text": "Go"},
        ...     ],
        ... })
        >>> contest.get_choice(2).text
        'Python'
    """
    id: int
    description: str
    choices: list[Choice] = field(default_factory=list)

    def get_choice(self, choice_id: int) -> Choice | None:
        """Get the choice with the given id, or None if the contest has none."""
        return find_choice(self, choice_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "choices": [c.to_dict() for c in self.choices],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        data = _require_record(data, "contest")
        choices = data.get("choices")
        if not isinstance(choices, list):
            raise ValueError(f"'choices' must be a list, got {choices!r}")
        return cls(
            id=_require_id(data, "id"),
            description=_require_str(data, "description"),
            choices=[Choice.from_dict(c) for c in choices],
        )


@dataclass(frozen=True)
class Vote:
    """A single (contest, choice) reference to be counted.

    Votes carry no identity: two equal votes are two separate votes.
    """
    contest_id: int
    choice_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"contest_id": self.contest_id, "choice_id": self.choice_id}

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        data = _require_record(data, "vote")
        return cls(
            contest_id=_require_id(data, "contest_id"),
            choice_id=_require_id(data, "choice_id"),
        )


@dataclass
class ResultVote:
    """Number of valid votes a single choice received in a contest."""
    choice_id: int
    total_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"choice_id": self.choice_id, "total_count": self.total_count}


@dataclass
class Winner:
    """The winning choice of a contest."""
    choice_id: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"choice_id": self.choice_id, "text": self.text}


@dataclass
class ContestResult:
    """Tally of a single contest that received at least one valid vote.

    Attributes:
        contest_id: Identifier of the tallied contest
        total_votes: Number of valid votes, equal to the sum of result counts
        results: One entry per choice with at least one valid vote
        winner: Choice with the highest count (see tallyvotes.tiebreak)
    """
    contest_id: int
    total_votes: int
    results: list[ResultVote]
    winner: Winner

    def get_count(self, choice_id: int) -> int:
        """Get the number of votes for a choice, 0 if it received none."""
        for r in self.results:
            if r.choice_id == choice_id:
                return r.total_count
        return 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "contest_id": self.contest_id,
            "total_votes": self.total_votes,
            "results": [r.to_dict() for r in self.results],
            "winner": self.winner.to_dict(),
        }


RejectionReason = Literal["unknown-contest", "unknown-choice"]

UNKNOWN_CONTEST: RejectionReason = "unknown-contest"
UNKNOWN_CHOICE: RejectionReason = "unknown-choice"


@dataclass
class Rejection:
    """A vote that was left out of the tally.

    Attributes:
        vote: The offending vote
        reason: UNKNOWN_CONTEST or UNKNOWN_CHOICE
    """
    vote: Vote
    reason: RejectionReason

    @property
    def message(self) -> str:
        if self.reason == UNKNOWN_CONTEST:
            return f"Invalid contest id {self.vote.contest_id}"
        return (
            f"Invalid choice {self.vote.choice_id} "
            f"for contest {self.vote.contest_id}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {**self.vote.to_dict(), "reason": self.reason}


@dataclass
class TallyOutcome:
    """Contest results together with the votes that were rejected."""
    results: list[ContestResult] = field(default_factory=list)
    rejections: list[Rejection] = field(default_factory=list)

    @property
    def num_rejected(self) -> int:
        return len(self.rejections)

    def get_result(self, contest_id: int) -> ContestResult | None:
        """Get the result for a contest, or None if it received no valid votes."""
        for r in self.results:
            if r.contest_id == contest_id:
                return r
        return None


def find_contest(contests: Iterable[Contest], contest_id: int) -> Contest | None:
    """Return the first contest with the given id, or None."""
    for contest in contests:
        if contest.id == contest_id:
            return contest
    return None


def find_choice(contest: Contest, choice_id: int) -> Choice | None:
    """Return the first choice of the contest with the given id, or None."""
    for choice in contest.choices:
        if choice.id == choice_id:
            return choice
    return None
