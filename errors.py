# errors.py
"""Failures of governance operations.

Every public operation either returns its result or raises one of these; a
raised error means the whole operation was rolled back.
"""


class GovernanceError(Exception):
    pass


class AuthorizationError(GovernanceError):
    """The caller lacks the required role or is not an eligible voter."""


class ReplayError(AuthorizationError):
    """A signed request reused a nonce that was already accepted."""


class NotFoundError(GovernanceError):
    pass


class RoundNotFoundError(NotFoundError):
    pass


class CandidateNotFoundError(NotFoundError):
    pass


class VoterNotFoundError(NotFoundError):
    pass


class DelegationNotFoundError(NotFoundError):
    pass


class ProposalNotFoundError(NotFoundError):
    pass


class AlreadyDoneError(GovernanceError):
    pass


class AlreadyRegisteredError(AlreadyDoneError):
    pass


class AlreadyVotedError(AlreadyDoneError):
    pass


class AlreadyFinalizedError(AlreadyDoneError):
    pass


class StateError(GovernanceError):
    """The operation is not allowed in the current voting state."""


class VotingClosedError(StateError):
    pass


class NotStartedError(StateError):
    pass


class RoundNotEndedError(StateError):
    pass


class ValidationError(GovernanceError):
    pass


class SelfDelegationError(ValidationError):
    pass


class LoopError(ValidationError):
    pass


class TimeRangeError(ValidationError):
    pass


class CapacityError(ValidationError):
    pass


class InsufficientStakeError(GovernanceError):
    # reserved for stake-gated operations
    pass
