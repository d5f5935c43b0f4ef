# authority.py
from db import atomic
from models import CallerNonce
from errors import AuthorizationError, ReplayError


def is_owner(state, caller):
    return caller is not None and caller == state.owner


def require_owner(state, caller):
    if not is_owner(state, caller):
        raise AuthorizationError("caller is not the owner")


def require_admin(state, caller):
    """Owner or the configured emergency admin."""
    if is_owner(state, caller):
        return
    if caller is not None and state.emergency_admin is not None and caller == state.emergency_admin:
        return
    raise AuthorizationError("caller is neither owner nor emergency admin")


@atomic
def consume_nonce(db, caller, nonce):
    """Accept a signed request's nonce only if it exceeds the caller's last one."""
    seen = db.get(CallerNonce, caller, with_for_update=True)
    if seen is not None and nonce <= seen.last_nonce:
        raise ReplayError(f"nonce {nonce} already used")
    if seen is None:
        db.add(CallerNonce(caller=caller, last_nonce=nonce))
    else:
        seen.last_nonce = nonce
