# controls.py
import logging

from db import atomic, get_state
from authority import require_owner
from errors import ValidationError

logger = logging.getLogger(__name__)


@atomic
def update_config(db, caller, min_vote_threshold, max_candidates_per_round, require_registration):
    s = get_state(db, for_update=True)
    require_owner(s, caller)
    if max_candidates_per_round < 1:
        raise ValidationError("max candidates per round must be at least 1")
    if min_vote_threshold < 0:
        raise ValidationError("min vote threshold cannot be negative")
    s.min_vote_threshold = min_vote_threshold
    s.max_candidates_per_round = max_candidates_per_round
    s.require_registration = bool(require_registration)
    logger.info("config updated: threshold=%s max_candidates=%s require_registration=%s",
                min_vote_threshold, max_candidates_per_round, require_registration)


@atomic
def set_emergency_admin(db, caller, admin):
    s = get_state(db, for_update=True)
    require_owner(s, caller)
    s.emergency_admin = admin
    logger.info("emergency admin set to %s", admin)


@atomic
def set_token_voting(db, caller, enabled):
    s = get_state(db, for_update=True)
    require_owner(s, caller)
    s.token_voting = bool(enabled)
    logger.info("token voting %s", "enabled" if enabled else "disabled")
