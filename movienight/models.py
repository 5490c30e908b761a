"""Core data models for nominations, ballots and tally results."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, NamedTuple, Self


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class Phase(Enum):
    """Process-wide stage of the event.

    Exactly one phase is active at a time. The administrator may move to
    any phase from any other.
    """
    NOMINATION = "nomination"
    VOTING = "voting"
    RESULTS = "results"

    @classmethod
    def parse(cls, value: "str | Phase") -> "Phase":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown phase {value!r} (expected one of: {names})") from None


DEFAULT_PHASE = Phase.NOMINATION


class VoteIntent(Enum):
    """What the voter asked for: a thumbs up or a thumbs down."""
    POSITIVE = 1
    NEGATIVE = -1

    @property
    def weight(self) -> int:
        return self.value


@dataclass(frozen=True)
class VoterIdentity:
    """The current voter as reported by the identity provider.

    Attributes:
        id: Stable voter identifier
        display_name: Name shown next to nominations and in vote breakdowns
        is_privileged: Whether this voter may act as administrator
    """
    id: str
    display_name: str
    is_privileged: bool = False


@dataclass(frozen=True)
class Candidate:
    """A nominated film.

    Attributes:
        id: Candidate identifier, assigned by the store
        title: Film title
        link: Optional link to a film database page
        comment: Optional note from the nominator
        nominator_id: Voter who owns this nomination
        nominator_display_name: Nominator's name at the time of display
        created_at: When the nomination was made
    """
    id: str
    title: str
    nominator_id: str
    nominator_display_name: str
    link: str = ""
    comment: str = ""
    created_at: datetime | None = None

    def with_nominator_name(self, name: str) -> Self:
        return replace(self, nominator_display_name=name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "comment": self.comment,
            "nominator_id": self.nominator_id,
            "nominator_display_name": self.nominator_display_name,
            "created_at": _format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        return cls(
            id=str(data["id"]),
            title=data["title"],
            link=data.get("link") or "",
            comment=data.get("comment") or "",
            nominator_id=data["nominator_id"],
            nominator_display_name=data.get("nominator_display_name") or "",
            created_at=_parse_timestamp(data.get("created_at")),
        )


@dataclass(frozen=True, eq=False)
class Ballot:
    """One voter's current votes.

    Attributes:
        voter_id: Owner of the ballot (one ballot per voter)
        voter_display_name: Name shown in the results breakdown
        entries: Mapping candidate_id -> weight, where weight is +1 or -1.
            A candidate without an entry has weight 0.
        updated_at: Time of the last change

    Example:
        >>> ballot = Ballot("v1", "Alice", {"m1": 1, "m2": -1})
        >>> ballot.weight("m3")
        0
    """
    voter_id: str
    voter_display_name: str
    entries: Mapping[str, int] = field(default_factory=dict)
    updated_at: datetime | None = None

    def __post_init__(self):
        entries = {}
        for candidate_id, weight in self.entries.items():
            if weight == 0:
                continue
            if weight not in (1, -1):
                raise ValueError(
                    f"Invalid weight {weight!r} for candidate {candidate_id!r} "
                    f"on ballot of voter {self.voter_id!r}"
                )
            entries[candidate_id] = int(weight)
        # Read-only copy so that no caller can change a ballot in place
        object.__setattr__(self, "entries", MappingProxyType(entries))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ballot):
            return NotImplemented
        return (
            self.voter_id == other.voter_id
            and self.voter_display_name == other.voter_display_name
            and dict(self.entries) == dict(other.entries)
            and self.updated_at == other.updated_at
        )

    def __hash__(self) -> int:
        return hash((self.voter_id, frozenset(self.entries.items())))

    @classmethod
    def empty(cls, voter_id: str, voter_display_name: str) -> Self:
        return cls(voter_id=voter_id, voter_display_name=voter_display_name)

    def weight(self, candidate_id: str) -> int:
        return self.entries.get(candidate_id, 0)

    @property
    def positive_count(self) -> int:
        return sum(1 for w in self.entries.values() if w == 1)

    @property
    def negative_count(self) -> int:
        return sum(1 for w in self.entries.values() if w == -1)

    def with_entries(self, entries: Mapping[str, int], updated_at: datetime | None = None) -> Self:
        """Return a copy with new entries, dropping zero weights."""
        kept = {cid: w for cid, w in entries.items() if w != 0}
        return replace(self, entries=kept, updated_at=updated_at or utc_now())

    def with_display_name(self, name: str) -> Self:
        return replace(self, voter_display_name=name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "voter_id": self.voter_id,
            "voter_display_name": self.voter_display_name,
            "entries": dict(self.entries),
            "updated_at": _format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        entries = {cid: int(w) for cid, w in (data.get("entries") or {}).items()}
        return cls(
            voter_id=data["voter_id"],
            voter_display_name=data.get("voter_display_name") or "",
            entries=entries,
            updated_at=_parse_timestamp(data.get("updated_at")),
        )


class VoterMark(NamedTuple):
    """A single (voter_display_name, weight) pair in a vote breakdown."""
    voter_display_name: str
    weight: int


@dataclass
class ScoredCandidate:
    """A candidate together with its aggregated votes.

    Derived on every tally and never stored.

    Attributes:
        candidate: The nominated film
        positive_count: Number of +1 votes
        negative_count: Number of -1 votes
        total: positive_count - negative_count
        voter_breakdown: Who voted how, in the order ballots were counted
    """
    candidate: Candidate
    positive_count: int = 0
    negative_count: int = 0
    total: int = 0
    voter_breakdown: list[VoterMark] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.candidate.id

    @property
    def title(self) -> str:
        return self.candidate.title

    def add_vote(self, voter_display_name: str, weight: int) -> None:
        if weight > 0:
            self.positive_count += 1
        else:
            self.negative_count += 1
        self.total += weight
        self.voter_breakdown.append(VoterMark(voter_display_name, weight))

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.candidate.to_dict(),
            "positive_count": self.positive_count,
            "negative_count": self.negative_count,
            "total": self.total,
            "voter_breakdown": [
                {"voter_display_name": m.voter_display_name, "weight": m.weight}
                for m in self.voter_breakdown
            ],
        }


@dataclass
class Placement:
    """A candidate's placement in the results.

    Attributes:
        candidate_id: Candidate identifier
        rank: 1-indexed placement (tied candidates share the same rank)
        tied: Whether this candidate shares its total with others
    """
    candidate_id: str
    rank: int
    tied: bool

    def to_dict(self) -> dict[str, Any]:
        return {"candidate_id": self.candidate_id, "rank": self.rank, "tied": self.tied}

    @classmethod
    def build_ranking(cls, ranked: list[ScoredCandidate]) -> list[Self]:
        """Build placements from candidates already sorted by total, best first.

        Candidates with equal totals share a rank; the next distinct total
        skips past them (1, 2, 2, 4).
        """
        placements = []
        i = 0
        while i < len(ranked):
            j = i
            while j < len(ranked) and ranked[j].total == ranked[i].total:
                j += 1
            group = ranked[i:j]
            for scored in group:
                placements.append(cls(candidate_id=scored.id, rank=i + 1, tied=len(group) > 1))
            i = j

        return placements


@dataclass
class TallyResult:
    """Ranked outcome of a tally.

    Attributes:
        ranking: Scored candidates, best first
        placements: Rank and tie flag for each entry of ``ranking``
        details: Counting statistics for transparency
    """
    ranking: list[ScoredCandidate]
    placements: list[Placement]
    details: dict[str, Any] = field(default_factory=dict)

    def top(self, n: int) -> list[ScoredCandidate]:
        return self.ranking[:n]

    def get_place(self, candidate_id: str) -> int | None:
        """Get the 1-indexed placement for a candidate, or None if not found."""
        for p in self.placements:
            if p.candidate_id == candidate_id:
                return p.rank
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ranking": [
                {**s.to_dict(), "rank": p.rank, "tied": p.tied}
                for s, p in zip(self.ranking, self.placements)
            ],
            "details": self.details,
        }
