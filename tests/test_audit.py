import pytest

import db
import ledger
import audit
import errors
from models import AuditEntry


@pytest.fixture
def three_votes(open_round, make_voter):
    round_id, alice = open_round
    for i, voter in enumerate(('v1', 'v2', 'v3')):
        make_voter(voter)
        ledger.cast_vote(voter, alice, 1, 'hash-' + voter, 160 + i, ip_hash='ip-' + voter)
    return round_id, alice


def test_entries_are_numbered(three_votes):
    round_id, alice = three_votes
    entries = list(audit.iter_entries())
    assert [e['id'] for e in entries] == [1, 2, 3]
    assert [e['voter'] for e in entries] == ['v1', 'v2', 'v3']
    assert entries[0]['previous_hash'] == audit.GENESIS_HASH
    assert entries[1]['previous_hash'] == entries[0]['entry_hash']
    assert entries[2]['ip_hash'] == 'ip-v3'
    assert [e['id'] for e in audit.iter_entries(start=3)] == [3]


def test_rejected_vote_leaves_no_gap(three_votes, make_voter):
    round_id, alice = three_votes
    with pytest.raises(errors.AlreadyVotedError):
        ledger.cast_vote('v1', alice, 1, 'again', 170)
    make_voter('v4')
    ledger.cast_vote('v4', alice, 1, 'hash-v4', 171)
    assert [e['id'] for e in audit.iter_entries()] == [1, 2, 3, 4]


def test_chain_verifies(three_votes):
    assert audit.verify_chain()


def test_chain_detects_tampering(three_votes):
    with db.transaction() as session:
        session.get(AuditEntry, 2).candidate_id = 99
    assert not audit.verify_chain()


def test_empty_trail():
    assert list(audit.iter_entries()) == []
    assert audit.verify_chain()
