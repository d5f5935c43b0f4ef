# voters.py
import logging

from db import atomic, get_state
from models import VoterRegistration
from authority import require_owner
from errors import AlreadyRegisteredError, VoterNotFoundError, ValidationError

logger = logging.getLogger(__name__)


@atomic
def register_voter(db, caller, category, stake, now):
    """Self-registration; a voter registers exactly once and starts unverified."""
    if stake < 0:
        raise ValidationError("stake cannot be negative")
    get_state(db, for_update=True)
    if db.get(VoterRegistration, caller) is not None:
        raise AlreadyRegisteredError("voter already registered")
    reg = VoterRegistration(
        voter=caller,
        registered=True,
        registration_date=now,
        category=category,
        kyc_verified=False,
        stake_amount=stake,
    )
    db.add(reg)
    logger.info("voter %s registered (category=%s, stake=%s)", caller, category, stake)


@atomic
def verify_kyc(db, caller, voter):
    s = get_state(db, for_update=True)
    require_owner(s, caller)
    reg = db.get(VoterRegistration, voter)
    if reg is None:
        raise VoterNotFoundError("voter not registered")
    reg.kyc_verified = True
    logger.info("voter %s KYC verified", voter)


def is_eligible(db, voter):
    s = get_state(db)
    if not s.require_registration:
        return True
    reg = db.get(VoterRegistration, voter) if voter is not None else None
    return reg is not None and reg.registered and reg.kyc_verified
