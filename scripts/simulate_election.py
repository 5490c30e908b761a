"""Run a simulated movie night with fake voters and print the results.

Generates voters and film titles using faker with a fixed seed, walks the
event through all three phases and prints the ranking. Useful for checking
the results view against a realistic spread of votes.

Usage:
    python scripts/simulate_election.py
    python scripts/simulate_election.py --voters 12 --films 20 --seed 7
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from faker import Faker

# Add the project root to the path so the script runs from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from movienight.config import WINNER_SLOTS, load_policy  # noqa: E402
from movienight.log import configure_logging  # noqa: E402
from movienight.models import Phase, VoteIntent, VoterIdentity  # noqa: E402
from movienight.session import VotingSession  # noqa: E402
from movienight.store import InMemoryStore  # noqa: E402

SEED = 20260201


def make_voters(fake: Faker, count: int) -> list[VoterIdentity]:
    names: set[str] = set()
    while len(names) < count:
        names.add(fake.first_name())
    return [VoterIdentity(id=f"voter-{i}", display_name=name) for i, name in enumerate(sorted(names))]


def simulate(voters: int, films: int, seed: int, policy_settings: dict) -> VotingSession:
    """Nominate, vote and return the administrator's session."""
    fake = Faker()
    Faker.seed(seed)
    rng = random.Random(seed)
    policy = load_policy(policy_settings)

    store = InMemoryStore()
    admin = VotingSession(store, VoterIdentity("admin", "Admin", is_privileged=True), policy)
    sessions = [VotingSession(store, identity, policy) for identity in make_voters(fake, voters)]

    admin.set_phase(Phase.NOMINATION)
    for _ in range(films):
        session = rng.choice(sessions)
        title = fake.catch_phrase()
        session.nominate(title, link=fake.url(), comment=fake.sentence(nb_words=5))

    admin.set_phase(Phase.VOTING)
    candidate_ids = [c.id for c in store.load_candidates()]
    for session in sessions:
        # More attempts than the allowance, so some votes bounce off the limits
        for _ in range(policy.max_positive + policy.max_negative + 3):
            intent = VoteIntent.NEGATIVE if rng.random() < 0.2 else VoteIntent.POSITIVE
            session.vote(rng.choice(candidate_ids), intent)

    admin.set_phase(Phase.RESULTS)
    return admin


def main():
    parser = argparse.ArgumentParser(
        description="Simulate a movie night with fake voters")
    parser.add_argument("--voters", type=int, default=8, help="Number of voters (default: 8)")
    parser.add_argument("--films", type=int, default=15, help="Number of nominations (default: 15)")
    parser.add_argument("--seed", type=int, default=SEED, help=f"Random seed (default: {SEED})")
    parser.add_argument("--max-positive", help="Override the positive vote allowance")
    parser.add_argument("--max-negative", help="Override the negative vote allowance")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every vote, including ignored ones")
    args = parser.parse_args()

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    settings = {}
    if args.max_positive is not None:
        settings["max_positive"] = args.max_positive
    if args.max_negative is not None:
        settings["max_negative"] = args.max_negative

    admin = simulate(args.voters, args.films, args.seed, settings)
    result = admin.results()

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    print(f"{result.details['num_voters']} voters, {result.details['votes_counted']} votes counted")
    for scored, placement in zip(result.ranking, result.placements):
        marker = "*" if placement.rank <= WINNER_SLOTS else " "
        tie = "=" if placement.tied else " "
        voters = ", ".join(
            f"{'+' if m.weight > 0 else '-'}{m.voter_display_name}" for m in scored.voter_breakdown
        )
        print(f"{marker}{tie}{placement.rank:>3}. {scored.total:>+3}  {scored.title}  ({voters})")


if __name__ == "__main__":
    main()
