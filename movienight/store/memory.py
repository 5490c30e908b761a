"""In-process store used by tests and scripts."""

import itertools
import uuid
from dataclasses import replace

from movienight.log import get_logger
from movienight.models import Ballot, Candidate, Phase, utc_now
from movienight.store.base import VotingStore

logger = get_logger(__name__)


class InMemoryStore(VotingStore):
    """VotingStore kept in plain dicts.

    Every write publishes the full new state of the affected collection.
    """

    def __init__(self):
        super().__init__()
        self._candidates: dict[str, Candidate] = {}
        self._ballots: dict[str, Ballot] = {}
        self._phase: Phase | None = None
        self._sequence: dict[str, int] = {}
        self._counter = itertools.count()

    def load_candidates(self) -> list[Candidate]:
        # Newest first; insertion order breaks timestamp ties
        return sorted(
            self._candidates.values(),
            key=lambda c: (c.created_at.timestamp() if c.created_at else 0.0, self._sequence[c.id]),
            reverse=True,
        )

    def create_candidate(self, candidate: Candidate) -> Candidate:
        stored = replace(
            candidate,
            id=candidate.id or uuid.uuid4().hex,
            created_at=candidate.created_at or utc_now(),
        )
        self._candidates[stored.id] = stored
        self._sequence[stored.id] = next(self._counter)
        logger.debug("Created candidate %s (%s)", stored.id, stored.title)
        self.publish("candidates", self.load_candidates())
        return stored

    def delete_candidate(self, candidate_id: str) -> None:
        if self._candidates.pop(candidate_id, None) is None:
            return
        self._sequence.pop(candidate_id, None)
        logger.debug("Deleted candidate %s", candidate_id)
        self.publish("candidates", self.load_candidates())

    def load_ballots(self) -> list[Ballot]:
        return list(self._ballots.values())

    def load_ballot(self, voter_id: str) -> Ballot | None:
        return self._ballots.get(voter_id)

    def save_ballot(self, ballot: Ballot) -> None:
        self._ballots[ballot.voter_id] = ballot
        self.publish("ballots", self.load_ballots())

    def load_phase(self) -> Phase | None:
        return self._phase

    def save_phase(self, phase: Phase) -> None:
        self._phase = phase
        self.publish("phase", phase)

    def rename_voter(self, voter_id: str, display_name: str) -> None:
        renamed = 0
        for candidate in list(self._candidates.values()):
            if candidate.nominator_id == voter_id:
                self._candidates[candidate.id] = candidate.with_nominator_name(display_name)
                renamed += 1

        ballot = self._ballots.get(voter_id)
        if ballot is not None:
            self._ballots[voter_id] = ballot.with_display_name(display_name)

        logger.debug("Renamed voter %s on %d nominations", voter_id, renamed)
        if renamed:
            self.publish("candidates", self.load_candidates())
        if ballot is not None:
            self.publish("ballots", self.load_ballots())
