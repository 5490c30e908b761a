"""Remaining vote allowance for a ballot."""

from typing import NamedTuple

from movienight.config import DEFAULT_POLICY, BallotPolicy
from movienight.models import Ballot, VoteIntent


class Allowance(NamedTuple):
    positive: int
    negative: int


class AllowanceCalculator:
    """Derives how many votes of each sign a voter may still cast.

    The counts are clamped at zero so that a ballot stored under a more
    generous policy never reports a negative allowance.
    """

    def __init__(self, policy: BallotPolicy = DEFAULT_POLICY):
        self.policy = policy

    def remaining_positive(self, ballot: Ballot) -> int:
        return max(0, self.policy.max_positive - ballot.positive_count)

    def remaining_negative(self, ballot: Ballot) -> int:
        return max(0, self.policy.max_negative - ballot.negative_count)

    def remaining(self, ballot: Ballot, intent: VoteIntent) -> int:
        if intent is VoteIntent.POSITIVE:
            return self.remaining_positive(ballot)
        return self.remaining_negative(ballot)

    def allowance(self, ballot: Ballot) -> Allowance:
        return Allowance(self.remaining_positive(ballot), self.remaining_negative(ballot))

    def can_cast(self, ballot: Ballot, candidate_id: str, intent: VoteIntent) -> bool:
        """Whether casting ``intent`` on the candidate would change the ballot.

        True when the vote toggles off an existing vote of the same sign,
        when allowance of that sign remains, or when the candidate holds a
        vote of the opposite sign that can be exchanged.
        """
        current = ballot.weight(candidate_id)
        if current != 0:
            return True
        return self.remaining(ballot, intent) > 0
