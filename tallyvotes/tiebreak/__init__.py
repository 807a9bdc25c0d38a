"""Tie-break policies for choosing a contest winner."""

from .base import TieBreaker

# Policy registry - import policies here to register them
_tiebreakers: list[type[TieBreaker]] = []

DEFAULT_TIEBREAK = "first-vote"


def register_tiebreaker(policy_class: type[TieBreaker]) -> type[TieBreaker]:
    """Decorator to register a tie-break policy class."""
    _tiebreakers.append(policy_class)
    return policy_class


def get_all_tiebreakers() -> list[TieBreaker]:
    """Return instances of all registered tie-break policies."""
    return [policy_class() for policy_class in _tiebreakers]


def get_tiebreaker(policy: str | TieBreaker) -> TieBreaker:
    """Resolve a policy name to a policy instance.

    Raises:
        ValueError: If no registered policy has the given name
    """
    if isinstance(policy, TieBreaker):
        return policy
    for tiebreaker in get_all_tiebreakers():
        if tiebreaker.name == policy:
            return tiebreaker
    known = ", ".join(t.name for t in get_all_tiebreakers())
    raise ValueError(f"Unknown tie-break policy {policy!r} (choose from: {known})")
