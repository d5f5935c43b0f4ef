import pytest

import rounds
import candidates
import controls
import stats
import errors


@pytest.fixture
def round_id(owner):
    return rounds.create_round(owner, 'Council', '', 100, 200)


def test_add_candidate(owner, round_id):
    cid = candidates.add_candidate(
        owner, round_id, 'Alice', 'Incumbent', 'QmAlice', 'council', 42,
        profile_url='https://example.org/alice', manifesto_hash='QmManifesto',
    )
    assert cid == 1
    c = stats.get_candidate(cid, round_id)
    assert c['name'] == 'Alice'
    assert c['vote_count'] == 0
    assert c['weighted_vote_count'] == 0
    assert c['active']
    assert c['created_at'] == 42
    assert c['creator'] == owner
    assert c['profile_url'] == 'https://example.org/alice'
    assert stats.get_round_candidates(round_id) == [cid]


def test_candidate_ids_are_global(owner, round_id):
    first = candidates.add_candidate(owner, round_id, 'Alice', '', 'QmA', None, 1)
    rounds.start_round(owner, round_id, 100)
    other = rounds.create_round(owner, 'Board', '', 300, 400)
    second = candidates.add_candidate(owner, other, 'Bob', '', 'QmB', None, 1)
    third = candidates.add_candidate(owner, round_id, 'Carol', '', 'QmC', None, 1)
    assert (first, second, third) == (1, 2, 3)
    assert stats.get_round_candidates(round_id) == [1, 3]
    assert stats.get_round_candidates(other) == [2]
    assert stats.get_candidate(2, round_id) is None


def test_add_candidate_owner_only(round_id):
    with pytest.raises(errors.AuthorizationError):
        candidates.add_candidate('mallory', round_id, 'Mallory', '', 'QmM', None, 1)
    assert stats.get_round_candidates(round_id) == []


def test_add_candidate_missing_round(owner):
    with pytest.raises(errors.RoundNotFoundError):
        candidates.add_candidate(owner, 3, 'Alice', '', 'QmA', None, 1)


def test_capacity_default(owner, round_id):
    for i in range(20):
        candidates.add_candidate(owner, round_id, f'C{i}', '', f'Qm{i}', None, 1)
    with pytest.raises(errors.CapacityError):
        candidates.add_candidate(owner, round_id, 'C20', '', 'Qm20', None, 1)
    assert len(stats.get_round_candidates(round_id)) == 20
    assert stats.get_candidate(21, round_id) is None
    assert stats.get_voting_status()['total_candidates'] == 20


def test_capacity_follows_config(owner, round_id):
    controls.update_config(owner, 1, 2, True)
    candidates.add_candidate(owner, round_id, 'A', '', 'QmA', None, 1)
    candidates.add_candidate(owner, round_id, 'B', '', 'QmB', None, 1)
    with pytest.raises(errors.CapacityError):
        candidates.add_candidate(owner, round_id, 'C', '', 'QmC', None, 1)


def test_list_capacity_is_hard_ceiling(owner, round_id):
    controls.update_config(owner, 1, 150, True)
    for i in range(100):
        candidates.add_candidate(owner, round_id, f'C{i}', '', f'Qm{i}', None, 1)
    with pytest.raises(errors.CapacityError):
        candidates.add_candidate(owner, round_id, 'C100', '', 'Qm100', None, 1)
    assert len(stats.get_round_candidates(round_id)) == 100
