"""Built-in tie-break policies."""

from tallyvotes.models import Contest
from tallyvotes.tiebreak import register_tiebreaker
from tallyvotes.tiebreak.base import TieBreaker


@register_tiebreaker
class FirstVoteTieBreaker(TieBreaker):
    """Among tied choices, the one that received a valid vote first wins."""

    @property
    def name(self) -> str:
        return "first-vote"

    @property
    def description(self) -> str:
        return "Earliest valid vote in the vote stream wins ties"

    def scan_order(self, contest: Contest, counts: dict[int, int]) -> list[int]:
        # counts is filled in vote order
        return list(counts)


@register_tiebreaker
class LowestIdTieBreaker(TieBreaker):
    """Among tied choices, the one with the lowest id wins."""

    @property
    def name(self) -> str:
        return "lowest-id"

    @property
    def description(self) -> str:
        return "Lowest choice id wins ties"

    def scan_order(self, contest: Contest, counts: dict[int, int]) -> list[int]:
        return sorted(counts)


@register_tiebreaker
class BallotOrderTieBreaker(TieBreaker):
    """Among tied choices, the one listed first in the contest wins.

    Counted choices are always defined in the contest, so every key of
    counts shows up in the ballot. Duplicate choice ids are visited once.
    """

    @property
    def name(self) -> str:
        return "ballot-order"

    @property
    def description(self) -> str:
        return "Choice listed earliest in the contest definition wins ties"

    def scan_order(self, contest: Contest, counts: dict[int, int]) -> list[int]:
        ordered = dict.fromkeys(c.id for c in contest.choices if c.id in counts)
        return list(ordered)
