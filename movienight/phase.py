"""Phase state machine: nomination -> voting -> results."""

from enum import Enum

from movienight.log import get_logger
from movienight.models import DEFAULT_PHASE, Phase, VoterIdentity
from movienight.store.base import VotingStore

logger = get_logger(__name__)


class PhaseError(Exception):
    """An action was attempted outside the phase it belongs to."""
    pass


class PermissionDeniedError(Exception):
    """The current voter is not allowed to perform an action."""
    pass


class Action(Enum):
    NOMINATE = "nominate"
    WITHDRAW = "withdraw"
    VOTE = "vote"
    VIEW_RESULTS = "view_results"


# Which phase makes each action meaningful
PERMITTED_ACTIONS: dict[Phase, frozenset[Action]] = {
    Phase.NOMINATION: frozenset({Action.NOMINATE, Action.WITHDRAW}),
    Phase.VOTING: frozenset({Action.VOTE}),
    Phase.RESULTS: frozenset({Action.VIEW_RESULTS}),
}


class PhaseController:
    """Reads and changes the process-wide phase.

    Any phase may follow any other; only the administrator may change it.
    The ballot and tally engines never consult this controller. Callers use
    ``is_permitted``/``require`` before mutating or exposing results.
    """

    def __init__(self, store: VotingStore):
        self.store = store

    @property
    def current(self) -> Phase:
        """The active phase. Records the default if no phase was ever set."""
        phase = self.store.load_phase()
        if phase is None:
            logger.info("No phase recorded, starting in %s", DEFAULT_PHASE.value)
            self.store.save_phase(DEFAULT_PHASE)
            phase = DEFAULT_PHASE
        return phase

    def set_phase(self, identity: VoterIdentity, new_phase: Phase | str) -> Phase:
        """Move to ``new_phase`` and publish it to all observers.

        Setting the phase that is already active does nothing.

        Raises:
            PermissionDeniedError: If ``identity`` is not privileged
            ValueError: If ``new_phase`` is not a known phase name
        """
        if not identity.is_privileged:
            raise PermissionDeniedError(f"{identity.display_name or identity.id} may not change the phase")

        new_phase = Phase.parse(new_phase)
        old_phase = self.store.load_phase()
        if old_phase is new_phase:
            return new_phase

        self.store.save_phase(new_phase)
        logger.info(
            "Phase changed from %s to %s by %s",
            old_phase.value if old_phase else "(none)", new_phase.value, identity.id,
        )
        return new_phase

    def is_permitted(self, action: Action, phase: Phase | None = None) -> bool:
        if phase is None:
            phase = self.current
        return action in PERMITTED_ACTIONS[phase]

    def require(self, action: Action) -> Phase:
        """Return the current phase, or raise if ``action`` does not belong to it.

        Raises:
            PhaseError: If the action is not permitted in the current phase
        """
        phase = self.current
        if action not in PERMITTED_ACTIONS[phase]:
            raise PhaseError(f"Cannot {action.value.replace('_', ' ')} during the {phase.value} phase")
        return phase
