"""Ballot policy settings."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# D21-style allowance: each voter may hand out this many votes of each sign
MAX_POSITIVE = 7
MAX_NEGATIVE = 1

# Number of top-ranked films highlighted as winners in the results
WINNER_SLOTS = 4


@dataclass(frozen=True)
class BallotPolicy:
    max_positive: int = MAX_POSITIVE
    max_negative: int = MAX_NEGATIVE

    def __post_init__(self):
        for name in ("max_positive", "max_negative"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


DEFAULT_POLICY = BallotPolicy()


def load_policy(settings: Mapping[str, Any] | None = None) -> BallotPolicy:
    """Build a BallotPolicy from a settings mapping.

    Missing keys fall back to the module defaults. Values given as strings
    (e.g. from an env file) are converted to int.

    Raises:
        ValueError: If a value is not a non-negative integer
    """
    if not settings:
        return DEFAULT_POLICY

    values = {}
    for key, default in (("max_positive", MAX_POSITIVE), ("max_negative", MAX_NEGATIVE)):
        raw = settings.get(key, default)
        if isinstance(raw, str):
            try:
                raw = int(raw.strip())
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {raw!r}") from None
        values[key] = raw
    return BallotPolicy(**values)
