# rounds.py
import logging

from db import atomic, get_state
from models import Round, Candidate, RoundCandidate, RoundResult, VotingTypeEnum
from authority import require_owner
from errors import (
    RoundNotFoundError, NotStartedError, TimeRangeError,
    AlreadyFinalizedError, RoundNotEndedError,
)

logger = logging.getLogger(__name__)


def get_round_or_raise(db, round_id):
    r = db.get(Round, round_id)
    if r is None:
        raise RoundNotFoundError(f"round {round_id} does not exist")
    return r


def candidate_ids(db, round_id):
    rows = db.query(RoundCandidate).filter_by(round_id=round_id).order_by(RoundCandidate.position).all()
    return [row.candidate_id for row in rows]


@atomic
def create_round(db, caller, title, description, start_time, end_time,
                 min_participation=0, voting_type=VotingTypeEnum.simple):
    """Define the next round; it stays inactive until start_round.

    The id is derived from the current round pointer, so creating two rounds
    without starting the first one yields the same id and the second
    definition replaces the first. The candidate list and any archived result
    of the replaced round are dropped.
    """
    s = get_state(db, for_update=True)
    require_owner(s, caller)
    if end_time <= start_time:
        raise TimeRangeError("end time must be after start time")

    round_id = s.current_round + 1
    r = db.get(Round, round_id)
    if r is None:
        r = Round(id=round_id)
        db.add(r)
    else:
        logger.warning("round %s redefined (was active=%s, finalized=%s)", round_id, r.active, r.finalized)
        db.query(RoundCandidate).filter_by(round_id=round_id).delete()
        db.query(RoundResult).filter_by(round_id=round_id).delete()
    r.title = title
    r.description = description
    r.start_time = start_time
    r.end_time = end_time
    r.min_participation = min_participation
    r.voting_type = VotingTypeEnum(voting_type)
    r.active = False
    r.finalized = False
    logger.info("round %s created: %r [%s, %s]", round_id, title, start_time, end_time)
    return round_id


@atomic
def start_round(db, caller, round_id, now):
    s = get_state(db, for_update=True)
    require_owner(s, caller)
    r = get_round_or_raise(db, round_id)
    if now < r.start_time:
        raise NotStartedError(f"round {round_id} starts at {r.start_time}")

    r.active = True
    s.current_round = round_id
    s.voting_active = True
    s.voting_start_time = r.start_time
    s.voting_end_time = r.end_time
    logger.info("round %s started at %s", round_id, now)


@atomic
def finalize_round(db, caller, round_id, now):
    """Close a round after its end time and archive its tally."""
    s = get_state(db, for_update=True)
    require_owner(s, caller)
    r = get_round_or_raise(db, round_id)
    if r.finalized:
        raise AlreadyFinalizedError(f"round {round_id} already finalized")
    if now <= r.end_time:
        raise RoundNotEndedError(f"round {round_id} ends at {r.end_time}")

    r.finalized = True
    r.active = False
    if s.current_round == round_id:
        s.voting_active = False

    results = {}
    for cid in candidate_ids(db, round_id):
        c = db.get(Candidate, (cid, round_id))
        results[str(cid)] = {
            "name": c.name,
            "votes": c.vote_count,
            "weighted_votes": c.weighted_vote_count,
        }
    total_votes = sum(item["votes"] for item in results.values())

    # winner: highest weighted tally that also clears the minimum vote threshold
    winner = None
    best = None
    for item in results.values():
        if item["votes"] < s.min_vote_threshold:
            continue
        if best is None or item["weighted_votes"] > best["weighted_votes"]:
            best = item
    if best is not None:
        winner = best["name"]

    record = RoundResult(
        round_id=round_id,
        results_data=results,
        total_votes=total_votes,
        winner=winner,
        quorum_reached=total_votes >= r.min_participation,
    )
    db.add(record)
    logger.info("round %s finalized: %s votes, winner %s", round_id, total_votes, winner)
    return record.to_dict()
