"""Shared test helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from movienight.models import Ballot, Candidate, VoterIdentity
from movienight.store import InMemoryStore

BASE_TIME = datetime(2026, 3, 1, 20, 0, tzinfo=timezone.utc)


def make_candidates(*ids: str) -> list[Candidate]:
    """Build candidates with the given ids, in the given order.

    Titles are "Film <id>"; every candidate is nominated by "n1".
    """
    return [
        Candidate(
            id=cid,
            title=f"Film {cid}",
            nominator_id="n1",
            nominator_display_name="Nina",
            created_at=BASE_TIME + timedelta(minutes=i),
        )
        for i, cid in enumerate(ids)
    ]


def make_ballot(voter_id: str, entries: dict[str, int] | None = None, name: str | None = None) -> Ballot:
    """Build a ballot; the display name defaults to the upper-cased voter id."""
    return Ballot(voter_id=voter_id, voter_display_name=name or voter_id.upper(), entries=entries or {})


def ranking_ids(scored) -> list[str]:
    return [s.id for s in scored]


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def admin():
    return VoterIdentity("admin", "Admin", is_privileged=True)


@pytest.fixture
def alice():
    return VoterIdentity("alice", "Alice")


@pytest.fixture
def bob():
    return VoterIdentity("bob", "Bob")


@pytest.fixture
def full_ballot():
    """Seven positives (c1..c7) and one negative (c8): nothing left to spend."""
    entries = {f"c{i}": 1 for i in range(1, 8)}
    entries["c8"] = -1
    return make_ballot("v1", entries)


@pytest.fixture
def positives_only_ballot():
    """Seven positives (c1..c7), negative allowance untouched."""
    return make_ballot("v1", {f"c{i}": 1 for i in range(1, 8)})
