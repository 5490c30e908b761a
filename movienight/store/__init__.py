"""Storage collaborators for candidates, ballots and the current phase."""

from .base import StoreEvent, VotingStore
from .memory import InMemoryStore

__all__ = ["InMemoryStore", "StoreEvent", "VotingStore"]
