"""Aggregating ballots into ranked results."""

from collections.abc import Iterable, Sequence

from movienight.config import DEFAULT_POLICY, BallotPolicy
from movienight.log import get_logger
from movienight.models import Ballot, Candidate, Placement, ScoredCandidate, TallyResult

logger = get_logger(__name__)


class TallyEngine:
    """Score = number of +1 votes minus number of -1 votes.

    Candidates are ranked by score, highest first. Ties keep the order of the
    candidate list passed in; the store lists candidates newest first, so a
    tie favours the more recently nominated film.

    Votes for candidates that are not in the list (e.g. a nomination deleted
    after votes were cast) are skipped.
    """

    def __init__(self, policy: BallotPolicy = DEFAULT_POLICY):
        self.policy = policy

    @staticmethod
    def _count(
        candidates: Sequence[Candidate], ballots: Iterable[Ballot]
    ) -> tuple[list[ScoredCandidate], dict[str, int]]:
        scored = [ScoredCandidate(candidate=c) for c in candidates]
        by_id = {s.id: s for s in scored}
        stats = {"ballots": 0, "voters": 0, "votes": 0, "ignored": 0}

        for ballot in ballots:
            stats["ballots"] += 1
            if ballot.entries:
                stats["voters"] += 1
            for candidate_id, weight in ballot.entries.items():
                target = by_id.get(candidate_id)
                if target is None:
                    stats["ignored"] += 1
                    continue
                target.add_vote(ballot.voter_display_name, weight)
                stats["votes"] += 1

        return scored, stats

    def tally(self, candidates: Sequence[Candidate], ballots: Iterable[Ballot]) -> list[ScoredCandidate]:
        """Score every candidate and return them best first.

        Args:
            candidates: All current candidates, in display order
            ballots: All ballots, in the order their votes should appear
                in each candidate's breakdown

        Returns:
            One ScoredCandidate per candidate, sorted by total descending
        """
        scored, _ = self._count(candidates, ballots)
        # sorted() is stable, so equal totals keep the candidate order
        return sorted(scored, key=lambda s: s.total, reverse=True)

    def calculate(self, candidates: Sequence[Candidate], ballots: Iterable[Ballot]) -> TallyResult:
        """Tally and attach placements and counting details."""
        scored, stats = self._count(candidates, ballots)
        ranking = sorted(scored, key=lambda s: s.total, reverse=True)

        if stats["ignored"]:
            logger.info("Skipped %d votes for candidates no longer nominated", stats["ignored"])

        return TallyResult(
            ranking=ranking,
            placements=Placement.build_ranking(ranking),
            details={
                "num_candidates": len(scored),
                "num_ballots": stats["ballots"],
                "num_voters": stats["voters"],
                "votes_counted": stats["votes"],
                "votes_ignored": stats["ignored"],
                "max_positive": self.policy.max_positive,
                "max_negative": self.policy.max_negative,
                "totals": {s.id: s.total for s in ranking},
            },
        )
