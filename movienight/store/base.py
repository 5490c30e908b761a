"""Abstract base class for the storage collaborator."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, NamedTuple

from movienight.models import Ballot, Candidate, Phase


class StoreEvent(NamedTuple):
    """A change pushed to subscribers.

    ``kind`` is one of "phase", "candidates" or "ballots"; ``payload`` is the
    new phase or the full current list, never a delta.
    """
    kind: str
    payload: Any


Subscriber = Callable[[StoreEvent], None]


class VotingStore(ABC):
    """Persistence for one movie night.

    Implementations back the core with a real document store; they own
    durability, access rules and change notifications. Writes are last
    writer wins. Subscribers receive complete snapshots.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, kind: str, payload: Any) -> None:
        event = StoreEvent(kind, payload)
        for callback in list(self._subscribers):
            callback(event)

    @abstractmethod
    def load_candidates(self) -> list[Candidate]:
        """All candidates, newest first."""
        pass

    @abstractmethod
    def create_candidate(self, candidate: Candidate) -> Candidate:
        """Store a new nomination and return it as stored (with id and timestamp)."""
        pass

    @abstractmethod
    def delete_candidate(self, candidate_id: str) -> None:
        pass

    @abstractmethod
    def load_ballots(self) -> list[Ballot]:
        """All ballots, in no particular order."""
        pass

    def load_ballot(self, voter_id: str) -> Ballot | None:
        for ballot in self.load_ballots():
            if ballot.voter_id == voter_id:
                return ballot
        return None

    @abstractmethod
    def save_ballot(self, ballot: Ballot) -> None:
        """Insert or replace the ballot of ``ballot.voter_id``."""
        pass

    @abstractmethod
    def load_phase(self) -> Phase | None:
        """The recorded phase, or None if none was ever recorded."""
        pass

    @abstractmethod
    def save_phase(self, phase: Phase) -> None:
        pass

    @abstractmethod
    def rename_voter(self, voter_id: str, display_name: str) -> None:
        """Change a voter's display name on their ballot and nominations."""
        pass
