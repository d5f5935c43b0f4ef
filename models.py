# models.py
from sqlalchemy import Column, Integer, BigInteger, String, Text, Enum, Boolean, JSON, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func
import enum

Base = declarative_base()

# identities are secp256k1 public keys in hex ('04' + X + Y)
IDENTITY = String(132)


class VotingTypeEnum(enum.Enum):
    simple = "simple"
    weighted = "weighted"
    ranked = "ranked"


class GovernanceState(Base):
    """Process-wide configuration, pointers and id counters (a single row)."""
    __tablename__ = "governance_state"
    id = Column(Integer, primary_key=True)
    owner = Column(IDENTITY, nullable=True)
    emergency_admin = Column(IDENTITY, nullable=True)
    voting_active = Column(Boolean, default=False, nullable=False)
    current_round = Column(Integer, default=0, nullable=False)
    voting_start_time = Column(BigInteger, default=0, nullable=False)
    voting_end_time = Column(BigInteger, default=0, nullable=False)
    min_vote_threshold = Column(Integer, default=1, nullable=False)
    require_registration = Column(Boolean, default=True, nullable=False)
    max_candidates_per_round = Column(Integer, default=20, nullable=False)
    token_voting = Column(Boolean, default=False, nullable=False)
    candidate_counter = Column(Integer, default=0, nullable=False)
    proposal_counter = Column(Integer, default=0, nullable=False)
    audit_counter = Column(Integer, default=0, nullable=False)


class Round(Base):
    __tablename__ = "rounds"
    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    start_time = Column(BigInteger, nullable=False)
    end_time = Column(BigInteger, nullable=False)
    min_participation = Column(Integer, default=0, nullable=False)
    voting_type = Column(Enum(VotingTypeEnum), default=VotingTypeEnum.simple, nullable=False)
    active = Column(Boolean, default=False, nullable=False)
    finalized = Column(Boolean, default=False, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "min_participation": self.min_participation,
            "voting_type": self.voting_type.value,
            "active": self.active,
            "finalized": self.finalized,
        }


class Candidate(Base):
    __tablename__ = "candidates"
    id = Column(Integer, primary_key=True, autoincrement=False)
    round_id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(150), nullable=False)
    description = Column(Text)
    image_hash = Column(String(128), nullable=False)
    profile_url = Column(String(255), nullable=True)
    manifesto_hash = Column(String(128), nullable=True)
    vote_count = Column(Integer, default=0, nullable=False)
    weighted_vote_count = Column(BigInteger, default=0, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(BigInteger, nullable=False)
    creator = Column(IDENTITY, nullable=False)
    category = Column(String(100))

    def to_dict(self):
        return {
            "id": self.id,
            "round_id": self.round_id,
            "name": self.name,
            "description": self.description,
            "image_hash": self.image_hash,
            "profile_url": self.profile_url,
            "manifesto_hash": self.manifesto_hash,
            "vote_count": self.vote_count,
            "weighted_vote_count": self.weighted_vote_count,
            "active": self.active,
            "created_at": self.created_at,
            "creator": self.creator,
            "category": self.category,
        }


class RoundCandidate(Base):
    """One slot of a round's ordered candidate-id list."""
    __tablename__ = "round_candidates"
    round_id = Column(Integer, primary_key=True, autoincrement=False)
    position = Column(Integer, primary_key=True, autoincrement=False)
    candidate_id = Column(Integer, nullable=False)


class VoterRegistration(Base):
    __tablename__ = "voter_registrations"
    voter = Column(IDENTITY, primary_key=True)
    registered = Column(Boolean, default=True, nullable=False)
    registration_date = Column(BigInteger, nullable=False)
    category = Column(String(100))
    kyc_verified = Column(Boolean, default=False, nullable=False)
    stake_amount = Column(BigInteger, default=0, nullable=False)

    def to_dict(self):
        return {
            "voter": self.voter,
            "registered": self.registered,
            "registration_date": self.registration_date,
            "category": self.category,
            "kyc_verified": self.kyc_verified,
            "stake_amount": self.stake_amount,
        }


class Delegation(Base):
    __tablename__ = "delegations"
    delegator = Column(IDENTITY, primary_key=True)
    round_id = Column(Integer, primary_key=True, autoincrement=False)
    delegate = Column(IDENTITY, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(BigInteger, nullable=False)

    def to_dict(self):
        return {
            "delegator": self.delegator,
            "round_id": self.round_id,
            "delegate": self.delegate,
            "active": self.active,
            "created_at": self.created_at,
        }


class VoteRecord(Base):
    __tablename__ = "vote_records"
    voter = Column(IDENTITY, primary_key=True)
    round_id = Column(Integer, primary_key=True, autoincrement=False)
    voted = Column(Boolean, default=True, nullable=False)
    candidate_id = Column(Integer, nullable=False)
    vote_weight = Column(BigInteger, nullable=False)
    timestamp = Column(BigInteger, nullable=False)
    verification_hash = Column(String(128), nullable=True)

    def to_dict(self):
        return {
            "voter": self.voter,
            "round_id": self.round_id,
            "voted": self.voted,
            "candidate_id": self.candidate_id,
            "vote_weight": self.vote_weight,
            "timestamp": self.timestamp,
            "verification_hash": self.verification_hash,
        }


class AuditEntry(Base):
    __tablename__ = "audit_entries"
    id = Column(Integer, primary_key=True, autoincrement=False)
    voter = Column(IDENTITY, nullable=False)
    candidate_id = Column(Integer, nullable=False)
    round_id = Column(Integer, nullable=False)
    timestamp = Column(BigInteger, nullable=False)
    verification_hash = Column(String(128))
    ip_hash = Column(String(128), nullable=True)
    previous_hash = Column(String(64), nullable=False)
    entry_hash = Column(String(64), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "voter": self.voter,
            "candidate_id": self.candidate_id,
            "round_id": self.round_id,
            "timestamp": self.timestamp,
            "verification_hash": self.verification_hash,
            "ip_hash": self.ip_hash,
            "previous_hash": self.previous_hash,
            "entry_hash": self.entry_hash,
        }


class Proposal(Base):
    __tablename__ = "proposals"
    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    proposer = Column(IDENTITY, nullable=False)
    votes_for = Column(BigInteger, default=0, nullable=False)
    votes_against = Column(BigInteger, default=0, nullable=False)
    voting_deadline = Column(BigInteger, nullable=False)
    executed = Column(Boolean, default=False, nullable=False)
    proposal_type = Column(String(50))
    target_value = Column(BigInteger, default=0, nullable=False)
    active = Column(Boolean, default=True, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "proposer": self.proposer,
            "votes_for": self.votes_for,
            "votes_against": self.votes_against,
            "voting_deadline": self.voting_deadline,
            "executed": self.executed,
            "proposal_type": self.proposal_type,
            "target_value": self.target_value,
            "active": self.active,
        }


class RoundResult(Base):
    __tablename__ = "round_results"
    id = Column(Integer, primary_key=True)
    round_id = Column(Integer, nullable=False, unique=True)
    created_at = Column(DateTime, default=func.now())
    results_data = Column(JSON)  # stores {candidate_id: {name, votes, weighted_votes}}
    total_votes = Column(Integer)
    winner = Column(String(150), nullable=True)
    quorum_reached = Column(Boolean, default=False, nullable=False)

    def to_dict(self):
        return {
            "round_id": self.round_id,
            "results_data": self.results_data,
            "total_votes": self.total_votes,
            "winner": self.winner,
            "quorum_reached": self.quorum_reached,
        }


class CallerNonce(Base):
    """Highest request nonce accepted from each caller."""
    __tablename__ = "caller_nonces"
    caller = Column(IDENTITY, primary_key=True)
    last_nonce = Column(BigInteger, nullable=False)
