"""Abstract base class for tie-break policies."""

from abc import ABC, abstractmethod

from tallyvotes.models import Contest


class TieBreaker(ABC):
    """Abstract base class for tie-break policies.

    The tally engine picks a winner by scanning choices and keeping the first
    one whose count is strictly greater than everything seen before it, so
    among equal maxima the choice scanned first wins. A policy decides that
    scan order. Policies are registered via the @register_tiebreaker
    decorator in tallyvotes/tiebreak/__init__.py.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used to select this policy."""
        pass

    @property
    def description(self) -> str:
        """Optional description of how ties are resolved."""
        return ""

    @abstractmethod
    def scan_order(self, contest: Contest, counts: dict[int, int]) -> list[int]:
        """Order in which the winner scan visits choice ids.

        Args:
            contest: Definition of the contest being tallied
            counts: Valid vote count per choice id, in order of each
                    choice's first valid vote

        Returns:
            Every key of counts exactly once
        """
        pass
