# proposals.py
import logging

from db import atomic, get_state
from models import Proposal, VoterRegistration
from voters import is_eligible
from errors import AuthorizationError, ProposalNotFoundError, VotingClosedError
import config

logger = logging.getLogger(__name__)


def proposal_weight(db, voter):
    reg = db.get(VoterRegistration, voter)
    if reg is None:
        return 1
    return 1 + reg.stake_amount // config.STAKE_PER_PROPOSAL_WEIGHT


@atomic
def create_proposal(db, caller, title, description, proposal_type, target_value, deadline):
    s = get_state(db, for_update=True)
    if not is_eligible(db, caller):
        raise AuthorizationError("caller is not an eligible voter")

    s.proposal_counter += 1
    p = Proposal(
        id=s.proposal_counter,
        title=title,
        description=description,
        proposer=caller,
        votes_for=0,
        votes_against=0,
        voting_deadline=deadline,
        executed=False,
        proposal_type=proposal_type,
        target_value=target_value,
        active=True,
    )
    db.add(p)
    logger.info("proposal %s created by %s: %r", p.id, caller, title)
    return p.id


@atomic
def vote_on_proposal(db, caller, proposal_id, support, now):
    """Add the caller's stake-derived weight for or against a proposal.

    Repeated calls by the same voter accumulate; there is no per-voter record.
    """
    get_state(db, for_update=True)
    if not is_eligible(db, caller):
        raise AuthorizationError("caller is not an eligible voter")
    p = db.get(Proposal, proposal_id)
    if p is None or not p.active:
        raise ProposalNotFoundError(f"proposal {proposal_id} not found")
    if now > p.voting_deadline:
        raise VotingClosedError(f"proposal {proposal_id} closed at {p.voting_deadline}")

    weight = proposal_weight(db, caller)
    if support:
        p.votes_for += weight
    else:
        p.votes_against += weight
    logger.info("proposal %s: %s voted %s with weight %s", proposal_id, caller, "for" if support else "against", weight)
    return weight
