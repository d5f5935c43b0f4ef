import pytest

import db
import voters
import controls
import stats
import errors


def eligible(voter):
    with db.reader() as session:
        return voters.is_eligible(session, voter)


def test_register_voter():
    voters.register_voter('alice', 'citizen', 2500, 10)
    reg = stats.get_voter('alice')
    assert reg['registered']
    assert not reg['kyc_verified']
    assert reg['stake_amount'] == 2500
    assert reg['registration_date'] == 10


def test_register_twice():
    voters.register_voter('alice', 'citizen', 0, 10)
    with pytest.raises(errors.AlreadyRegisteredError):
        voters.register_voter('alice', 'resident', 99, 11)
    assert stats.get_voter('alice')['category'] == 'citizen'


def test_verify_kyc(owner):
    voters.register_voter('alice', 'citizen', 0, 10)
    assert not eligible('alice')
    voters.verify_kyc(owner, 'alice')
    assert eligible('alice')


def test_verify_kyc_owner_only():
    voters.register_voter('alice', 'citizen', 0, 10)
    with pytest.raises(errors.AuthorizationError):
        voters.verify_kyc('alice', 'alice')
    assert not stats.get_voter('alice')['kyc_verified']


def test_verify_kyc_unknown_voter(owner):
    with pytest.raises(errors.VoterNotFoundError):
        voters.verify_kyc(owner, 'ghost')


def test_registration_not_required(owner):
    assert not eligible('ghost')
    controls.update_config(owner, 1, 20, False)
    assert eligible('ghost')


def test_missing_voter_reads_as_none():
    assert stats.get_voter('ghost') is None


def test_negative_stake_rejected():
    with pytest.raises(errors.ValidationError):
        voters.register_voter('mallory', 'citizen', -5000, 10)
    assert stats.get_voter('mallory') is None
