# stats.py
"""Side-effect-free lookups. Missing entries come back as None or []."""
from db import reader, get_state
from models import Round, Candidate, VoterRegistration, VoteRecord, Delegation, Proposal, RoundResult
from rounds import candidate_ids


def _one(model, key):
    with reader() as db:
        obj = db.get(model, key)
        return obj.to_dict() if obj is not None else None


def get_candidate(candidate_id, round_id):
    return _one(Candidate, (candidate_id, round_id))


def get_round_candidates(round_id):
    with reader() as db:
        return candidate_ids(db, round_id)


def get_round(round_id):
    return _one(Round, round_id)


def get_voter(voter):
    return _one(VoterRegistration, voter)


def get_vote(voter, round_id):
    return _one(VoteRecord, (voter, round_id))


def get_delegation(delegator, round_id):
    return _one(Delegation, (delegator, round_id))


def get_proposal(proposal_id):
    return _one(Proposal, proposal_id)


def get_round_result(round_id):
    with reader() as db:
        r = db.query(RoundResult).filter_by(round_id=round_id).first()
        return r.to_dict() if r is not None else None


def get_election_stats(round_id):
    """Totals for a round, recounted from the candidate table."""
    with reader() as db:
        r = db.get(Round, round_id)
        if r is None:
            return None
        ids = candidate_ids(db, round_id)
        total_votes = 0
        total_weight = 0
        for cid in ids:
            c = db.get(Candidate, (cid, round_id))
            total_votes += c.vote_count
            total_weight += c.weighted_vote_count
        return {
            "round": r.to_dict(),
            "total_candidates": len(ids),
            "total_votes": total_votes,
            "total_weighted_votes": total_weight,
        }


def get_voting_status():
    with reader() as db:
        s = get_state(db)
        return {
            "voting_active": s.voting_active,
            "current_round": s.current_round,
            "voting_start_time": s.voting_start_time,
            "voting_end_time": s.voting_end_time,
            "min_vote_threshold": s.min_vote_threshold,
            "require_registration": s.require_registration,
            "max_candidates_per_round": s.max_candidates_per_round,
            "token_voting": s.token_voting,
            "emergency_admin": s.emergency_admin,
            "total_candidates": s.candidate_counter,
            "total_proposals": s.proposal_counter,
            "total_votes": s.audit_counter,
        }
