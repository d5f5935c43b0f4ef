import pytest

import delegation
import stats
import errors


@pytest.fixture
def abc(make_voter):
    return [make_voter(v) for v in ('a', 'b', 'c')]


def test_delegate(abc):
    delegation.delegate_vote('a', 'b', 1, 120)
    d = stats.get_delegation('a', 1)
    assert d == {'delegator': 'a', 'round_id': 1, 'delegate': 'b', 'active': True, 'created_at': 120}


def test_self_delegation(abc):
    with pytest.raises(errors.SelfDelegationError):
        delegation.delegate_vote('a', 'a', 1, 120)
    assert stats.get_delegation('a', 1) is None


def test_self_delegation_checked_before_eligibility():
    with pytest.raises(errors.SelfDelegationError):
        delegation.delegate_vote('ghost', 'ghost', 1, 120)


def test_ineligible_delegator(abc):
    with pytest.raises(errors.AuthorizationError):
        delegation.delegate_vote('ghost', 'a', 1, 120)


def test_direct_loop_rejected(abc):
    delegation.delegate_vote('a', 'b', 1, 120)
    with pytest.raises(errors.LoopError):
        delegation.delegate_vote('b', 'a', 1, 121)
    assert stats.get_delegation('b', 1) is None


def test_loop_check_is_per_round(abc):
    delegation.delegate_vote('a', 'b', 1, 120)
    delegation.delegate_vote('b', 'a', 2, 121)
    assert stats.get_delegation('b', 2)['delegate'] == 'a'


def test_three_node_cycle_accepted(abc):
    delegation.delegate_vote('a', 'b', 1, 120)
    delegation.delegate_vote('b', 'c', 1, 121)
    delegation.delegate_vote('c', 'a', 1, 122)
    assert stats.get_delegation('c', 1)['delegate'] == 'a'


def test_revoke(abc):
    delegation.delegate_vote('a', 'b', 1, 120)
    delegation.revoke_delegation('a', 1)
    d = stats.get_delegation('a', 1)
    assert d is not None
    assert not d['active']
    # a revoked edge no longer blocks the reverse direction
    delegation.delegate_vote('b', 'a', 1, 130)


def test_redelegate_overwrites(abc):
    delegation.delegate_vote('a', 'b', 1, 120)
    delegation.revoke_delegation('a', 1)
    delegation.delegate_vote('a', 'c', 1, 140)
    d = stats.get_delegation('a', 1)
    assert d['delegate'] == 'c'
    assert d['active']
    assert d['created_at'] == 140


def test_revoke_missing(abc):
    with pytest.raises(errors.DelegationNotFoundError):
        delegation.revoke_delegation('a', 1)
