"""Tally engine: validate votes, count them and pick a winner per contest."""

import logging
from typing import Iterable

from tallyvotes.models import (
    UNKNOWN_CHOICE,
    UNKNOWN_CONTEST,
    Contest,
    ContestResult,
    Rejection,
    RejectionReason,
    ResultVote,
    TallyOutcome,
    Vote,
    Winner,
    find_choice,
)
from tallyvotes.tiebreak import DEFAULT_TIEBREAK, TieBreaker, get_tiebreaker
from tallyvotes.tiebreak import policies  # noqa: F401

logger = logging.getLogger(__name__)


def tally(
    votes: Iterable[Vote],
    contests: Iterable[Contest],
    tiebreak: str | TieBreaker = DEFAULT_TIEBREAK,
) -> list[ContestResult]:
    """Count valid votes and report one result per contest that received any.

    Votes referencing an unknown contest, or a choice the contest does not
    offer, are skipped and logged. Use count_votes() to get them back as
    data as well.
    """
    return count_votes(votes, contests, tiebreak).results


def count_votes(
    votes: Iterable[Vote],
    contests: Iterable[Contest],
    tiebreak: str | TieBreaker = DEFAULT_TIEBREAK,
) -> TallyOutcome:
    """Tally votes against contest definitions.

    Args:
        votes: Votes to count, consumed once in order
        contests: Contest definitions; the first contest with a given id wins
        tiebreak: Tie-break policy name or instance

    Returns:
        TallyOutcome with a ContestResult for each contest that received at
        least one valid vote, and a Rejection for each vote left out

    Raises:
        ValueError: If tiebreak names no registered policy
    """
    tiebreaker = get_tiebreaker(tiebreak)

    # Index by id once, keeping the first contest as a linear scan would
    contests_by_id: dict[int, Contest] = {}
    for contest in contests:
        contests_by_id.setdefault(contest.id, contest)

    # contest id -> {choice id -> count}, e.g. {1: {1: 2, 2: 1, 3: 1}}
    counts: dict[int, dict[int, int]] = {}
    rejections: list[Rejection] = []

    for vote in votes:
        contest = contests_by_id.get(vote.contest_id)
        if contest is None:
            rejections.append(_reject(vote, UNKNOWN_CONTEST))
            continue

        choice = find_choice(contest, vote.choice_id)
        if choice is None:
            rejections.append(_reject(vote, UNKNOWN_CHOICE))
            continue

        contest_counts = counts.setdefault(contest.id, {})
        contest_counts[choice.id] = contest_counts.get(choice.id, 0) + 1

    results = [
        _build_result(contests_by_id[contest_id], choice_counts, tiebreaker)
        for contest_id, choice_counts in counts.items()
    ]

    if rejections:
        logger.info("Rejected %d votes", len(rejections))
    logger.debug("Tallied %d contests", len(results))

    return TallyOutcome(results=results, rejections=rejections)


def _reject(vote: Vote, reason: RejectionReason) -> Rejection:
    rejection = Rejection(vote=vote, reason=reason)
    logger.warning(rejection.message)
    return rejection


def _build_result(
    contest: Contest, choice_counts: dict[int, int], tiebreaker: TieBreaker
) -> ContestResult:
    """Sum a contest's counts and select its winner."""
    total_votes = sum(choice_counts.values())

    # Strict comparison: the first maximum in scan order wins
    max_count = 0
    winner_id = None
    for choice_id in tiebreaker.scan_order(contest, choice_counts):
        if choice_counts[choice_id] > max_count:
            max_count = choice_counts[choice_id]
            winner_id = choice_id

    # Every counted choice was validated against the contest
    choice = find_choice(contest, winner_id)

    return ContestResult(
        contest_id=contest.id,
        total_votes=total_votes,
        results=[
            ResultVote(choice_id=choice_id, total_count=count)
            for choice_id, count in choice_counts.items()
        ],
        winner=Winner(choice_id=choice.id, text=choice.text),
    )
