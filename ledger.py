# ledger.py
"""Vote acceptance.

A round's voting window opens when start_round runs at or after its start
time and closes once the clock passes the global end time, or earlier when an
admin pauses voting. Each voter gets one vote record per round.
"""
import logging

from db import atomic, get_state
from models import Candidate, VoteRecord
from authority import require_admin
from voters import is_eligible
import audit
from errors import (
    AuthorizationError, AlreadyVotedError, CandidateNotFoundError, VotingClosedError, ValidationError,
)

logger = logging.getLogger(__name__)


def calculate_vote_weight(state, base_weight):
    # token voting trusts the supplied weight; no balance lookup is made
    if state.token_voting:
        return base_weight
    return 1


@atomic
def cast_vote(db, caller, candidate_id, base_weight, verification_hash, now, ip_hash=None):
    s = get_state(db, for_update=True)
    if not s.voting_active or now > s.voting_end_time:
        raise VotingClosedError("voting is closed")
    if not is_eligible(db, caller):
        raise AuthorizationError("caller is not an eligible voter")

    round_id = s.current_round
    if db.get(VoteRecord, (caller, round_id)) is not None:
        raise AlreadyVotedError(f"already voted in round {round_id}")

    c = db.get(Candidate, (candidate_id, round_id))
    if c is None or not c.active:
        raise CandidateNotFoundError(f"candidate {candidate_id} is not running in round {round_id}")

    if base_weight < 0:
        raise ValidationError("base weight cannot be negative")
    weight = calculate_vote_weight(s, base_weight)
    db.add(VoteRecord(
        voter=caller,
        round_id=round_id,
        voted=True,
        candidate_id=candidate_id,
        vote_weight=weight,
        timestamp=now,
        verification_hash=verification_hash,
    ))
    c.vote_count += 1
    c.weighted_vote_count += weight
    vote_id = audit.record(db, s, caller, candidate_id, round_id, verification_hash, now, ip_hash=ip_hash)
    logger.info("round %s: vote %s for candidate %s (weight %s)", round_id, vote_id, candidate_id, weight)
    return weight


@atomic
def emergency_pause(db, caller):
    s = get_state(db, for_update=True)
    require_admin(s, caller)
    s.voting_active = False
    logger.warning("voting paused by %s", caller)
