"""Orchestrator: one voter's view of a movie night.

Wires the pure engines to the store and upholds the phase contract: the
engines accept any call, the session refuses calls that do not belong to
the current phase.
"""

from dataclasses import replace

from movienight.allowance import Allowance, AllowanceCalculator
from movienight.ballot import BallotEngine
from movienight.config import DEFAULT_POLICY, BallotPolicy
from movienight.importers import detect_importer, detect_importer_by_content
from movienight.log import get_logger
from movienight.models import Ballot, Candidate, Phase, TallyResult, VoteIntent, VoterIdentity
from movienight.phase import Action, PermissionDeniedError, PhaseController, PhaseError
from movienight.store.base import VotingStore
from movienight.tally import TallyEngine

logger = get_logger(__name__)

ANONYMOUS_NAME = "Anonymous"

__all__ = [
    "NotFoundError",
    "PermissionDeniedError",
    "PhaseError",
    "SessionError",
    "ValidationError",
    "VotingSession",
]


class SessionError(Exception):
    """Error while handling a voter's request."""
    pass


class NotFoundError(SessionError):
    pass


class ValidationError(SessionError, ValueError):
    pass


class VotingSession:
    """Actions available to one voter against a shared store.

    Args:
        store: The persistence collaborator
        identity: The current voter
        policy: Ballot allowance policy
    """

    def __init__(self, store: VotingStore, identity: VoterIdentity, policy: BallotPolicy = DEFAULT_POLICY):
        self.store = store
        self.identity = identity
        self.policy = policy
        self.phases = PhaseController(store)
        self.ballots = BallotEngine(policy)
        self.allowances = AllowanceCalculator(policy)
        self.tally = TallyEngine(policy)

    @property
    def display_name(self) -> str:
        return self.identity.display_name or ANONYMOUS_NAME

    # --- phase ---

    @property
    def phase(self) -> Phase:
        return self.phases.current

    def set_phase(self, phase: Phase | str) -> Phase:
        return self.phases.set_phase(self.identity, phase)

    # --- nomination ---

    def candidates(self) -> list[Candidate]:
        return self.store.load_candidates()

    def nominate(self, title: str, link: str = "", comment: str = "") -> Candidate:
        """Nominate a film in the current voter's name.

        Raises:
            PhaseError: Outside the nomination phase
            ValidationError: If the title is blank
        """
        self.phases.require(Action.NOMINATE)
        title = (title or "").strip()
        if not title:
            raise ValidationError("A nomination needs a title")

        candidate = self.store.create_candidate(Candidate(
            id="",
            title=title,
            link=(link or "").strip(),
            comment=(comment or "").strip(),
            nominator_id=self.identity.id,
            nominator_display_name=self.display_name,
        ))
        logger.info("%s nominated %r", self.identity.id, candidate.title)
        return candidate

    def can_withdraw(self, candidate: Candidate) -> bool:
        return self.identity.is_privileged or candidate.nominator_id == self.identity.id

    def withdraw(self, candidate_id: str) -> None:
        """Delete a nomination. Only its nominator or the administrator may do so.

        Raises:
            PhaseError: Outside the nomination phase
            NotFoundError: If there is no such candidate
            PermissionDeniedError: If the voter does not own the nomination
        """
        self.phases.require(Action.WITHDRAW)
        candidate = next((c for c in self.store.load_candidates() if c.id == candidate_id), None)
        if candidate is None:
            raise NotFoundError(f"No nomination with id {candidate_id!r}")
        if not self.can_withdraw(candidate):
            raise PermissionDeniedError(f"Only the nominator can withdraw {candidate.title!r}")

        self.store.delete_candidate(candidate_id)
        logger.info("%s withdrew %r", self.identity.id, candidate.title)

    def import_nominations(self, source: str, content: bytes | str) -> int:
        """Create one nomination per row of a pasted or uploaded batch.

        The administrator owns the imported nominations; each row's nominator
        name is shown as the nominator. Allowed in any phase.

        Args:
            source: Filename or URL the content came from ("" for pasted text)
            content: The batch text

        Returns:
            Number of nominations created

        Raises:
            PermissionDeniedError: If the voter is not the administrator
            ValidationError: If the batch format cannot be determined
        """
        if not self.identity.is_privileged:
            raise PermissionDeniedError("Only the administrator can import nominations")

        raw = content.encode("utf-8") if isinstance(content, str) else content
        importer = detect_importer(source) if source else None
        if importer is None:
            importer = detect_importer_by_content(raw, source)
        if importer is None:
            raise ValidationError(
                "We couldn't determine the batch format. "
                "Paste tab-separated rows or upload a .tsv or .csv file."
            )

        added = 0
        for row in importer.parse(raw):
            self.store.create_candidate(Candidate(
                id="",
                title=row.title,
                link=row.link,
                comment=row.comment,
                nominator_id=self.identity.id,
                nominator_display_name=row.nominator,
            ))
            added += 1

        logger.info("Imported %d nominations (%s)", added, importer.name)
        return added

    # --- voting ---

    def my_ballot(self) -> Ballot:
        """The voter's ballot, or an empty unsaved one before their first vote."""
        ballot = self.store.load_ballot(self.identity.id)
        if ballot is None:
            return Ballot.empty(self.identity.id, self.display_name)
        return ballot

    def allowance(self) -> Allowance:
        return self.allowances.allowance(self.my_ballot())

    def vote(self, candidate_id: str, intent: VoteIntent) -> Ballot:
        """Cast, toggle or exchange a vote and save the result.

        Votes the allowance rules reject leave the ballot unchanged and are
        not saved.

        Raises:
            PhaseError: Outside the voting phase
        """
        self.phases.require(Action.VOTE)
        ballot = self.my_ballot()
        if ballot.voter_display_name != self.display_name:
            ballot = ballot.with_display_name(self.display_name)

        known = {c.id for c in self.store.load_candidates()}
        updated = self.ballots.apply_vote(ballot, candidate_id, intent, candidate_ids=known)
        if updated is not ballot:
            self.store.save_ballot(updated)
        return updated

    # --- results ---

    def results(self) -> TallyResult:
        """Rank all candidates. The administrator may look before the results phase.

        Raises:
            PhaseError: Outside the results phase, for non-privileged voters
        """
        if not self.identity.is_privileged:
            self.phases.require(Action.VIEW_RESULTS)
        return self.tally.calculate(self.store.load_candidates(), self.store.load_ballots())

    # --- identity ---

    def rename(self, display_name: str) -> VoterIdentity:
        """Change the voter's display name everywhere it is shown.

        Raises:
            ValidationError: If the name is blank
        """
        display_name = (display_name or "").strip()
        if not display_name:
            raise ValidationError("Display name cannot be blank")

        self.store.rename_voter(self.identity.id, display_name)
        self.identity = replace(self.identity, display_name=display_name)
        logger.info("Voter %s is now called %r", self.identity.id, display_name)
        return self.identity
