# candidates.py
import logging

from db import atomic, get_state
from models import Candidate, RoundCandidate
from authority import require_owner
from rounds import get_round_or_raise
from errors import CapacityError
import config

logger = logging.getLogger(__name__)


@atomic
def add_candidate(db, caller, round_id, name, description, image_hash, category, now,
                  profile_url=None, manifesto_hash=None):
    s = get_state(db, for_update=True)
    require_owner(s, caller)
    get_round_or_raise(db, round_id)

    count = db.query(RoundCandidate).filter_by(round_id=round_id).count()
    if count >= s.max_candidates_per_round:
        raise CapacityError(f"round {round_id} already has {count} candidates")
    if count >= config.CANDIDATE_LIST_CAPACITY:
        raise CapacityError(f"candidate list of round {round_id} is full")

    s.candidate_counter += 1
    candidate_id = s.candidate_counter
    c = Candidate(
        id=candidate_id,
        round_id=round_id,
        name=name,
        description=description,
        image_hash=image_hash,
        profile_url=profile_url,
        manifesto_hash=manifesto_hash,
        vote_count=0,
        weighted_vote_count=0,
        active=True,
        created_at=now,
        creator=caller,
        category=category,
    )
    db.add(c)
    db.add(RoundCandidate(round_id=round_id, position=count, candidate_id=candidate_id))
    logger.info("candidate %s (%s) added to round %s", candidate_id, name, round_id)
    return candidate_id
