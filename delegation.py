# delegation.py
"""Per-round delegation edges.

Delegations are recorded and can be revoked, but vote weighting does not read
them: a delegator still casts their own vote. The loop check only looks one
hop back (A->B then B->A is refused); longer cycles such as A->B->C->A are
accepted.
"""
import logging

from db import atomic, get_state
from models import Delegation
from voters import is_eligible
from errors import AuthorizationError, SelfDelegationError, LoopError, DelegationNotFoundError

logger = logging.getLogger(__name__)


@atomic
def delegate_vote(db, caller, delegate, round_id, now):
    get_state(db, for_update=True)
    if caller == delegate:
        raise SelfDelegationError("cannot delegate to yourself")
    if not is_eligible(db, caller):
        raise AuthorizationError("caller is not an eligible voter")

    reverse = db.get(Delegation, (delegate, round_id))
    if reverse is not None and reverse.active and reverse.delegate == caller:
        raise LoopError("delegation loop detected")

    d = db.get(Delegation, (caller, round_id))
    if d is None:
        d = Delegation(delegator=caller, round_id=round_id)
        db.add(d)
    d.delegate = delegate
    d.active = True
    d.created_at = now
    logger.info("round %s: %s delegated to %s", round_id, caller, delegate)


@atomic
def revoke_delegation(db, caller, round_id):
    get_state(db, for_update=True)
    d = db.get(Delegation, (caller, round_id))
    if d is None:
        raise DelegationNotFoundError("no delegation for this round")
    d.active = False
    logger.info("round %s: %s revoked delegation to %s", round_id, caller, d.delegate)
