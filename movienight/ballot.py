"""Applying a single vote to a ballot under the D21 allowance rules."""

from collections.abc import Collection
from datetime import datetime

from movienight.allowance import AllowanceCalculator
from movienight.config import DEFAULT_POLICY, BallotPolicy
from movienight.log import get_logger
from movienight.models import Ballot, VoteIntent

logger = get_logger(__name__)


class BallotEngine:
    """Limited approval/disapproval ballot.

    Each voter holds at most ``max_positive`` +1 votes and ``max_negative``
    -1 votes. A vote action on a candidate resolves as follows, where w is
    the intent's weight and current is the candidate's weight on the ballot:

    - current == w: the vote is toggled off (weight 0)
    - allowance of sign w remains: weight becomes w
    - current == -w: the opposite vote is exchanged for w, even when the
      allowance of sign w is spent, since the exchange frees a slot of the
      other sign. This can leave the ballot over the allowance of sign w;
      AllowanceCalculator then reports zero remaining.
    - otherwise: nothing happens and the input ballot is returned

    A weight of 0 removes the candidate from the ballot's entries. The input
    ballot is never modified; persisting the result is up to the caller.
    """

    def __init__(self, policy: BallotPolicy = DEFAULT_POLICY):
        self.policy = policy
        self.allowance = AllowanceCalculator(policy)

    def resolve_weight(self, ballot: Ballot, candidate_id: str, intent: VoteIntent) -> int | None:
        """Return the candidate's new weight, or None if the vote is a no-op."""
        w = intent.weight
        current = ballot.weight(candidate_id)

        if current == w:
            return 0
        if self.allowance.remaining(ballot, intent) > 0:
            return w
        if current == -w:
            return w
        return None

    def apply_vote(
        self,
        ballot: Ballot,
        candidate_id: str,
        intent: VoteIntent,
        *,
        candidate_ids: Collection[str] | None = None,
        now: datetime | None = None,
    ) -> Ballot:
        """Apply one vote action and return the resulting ballot.

        Args:
            ballot: The voter's current ballot
            candidate_id: Candidate the vote is cast on
            intent: Positive or negative vote
            candidate_ids: Ids of the candidates currently on offer. When
                given, a vote on any other id is ignored.
            now: Timestamp for the new ballot (defaults to the current time)

        Returns:
            A new Ballot, or ``ballot`` itself when the vote is ignored
        """
        if candidate_ids is not None and candidate_id not in candidate_ids:
            logger.debug("Ignoring vote from %s on unknown candidate %s", ballot.voter_id, candidate_id)
            return ballot

        new_weight = self.resolve_weight(ballot, candidate_id, intent)
        if new_weight is None:
            logger.debug(
                "Ignoring %s vote from %s on %s: allowance exhausted",
                intent.name.lower(), ballot.voter_id, candidate_id,
            )
            return ballot

        entries = dict(ballot.entries)
        if new_weight == 0:
            entries.pop(candidate_id, None)
        else:
            entries[candidate_id] = new_weight

        return ballot.with_entries(entries, updated_at=now)
