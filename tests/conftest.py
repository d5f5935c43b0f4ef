import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import db
import rounds
import candidates
import voters

OWNER = 'owner'


@pytest.fixture(autouse=True)
def database():
    db.init_db(owner=OWNER, database_url='sqlite://')
    yield
    db.drop_db()


@pytest.fixture
def owner():
    return OWNER


@pytest.fixture
def make_voter():
    def make(voter, stake=0, category='citizen', verified=True, now=10):
        voters.register_voter(voter, category, stake, now)
        if verified:
            voters.verify_kyc(OWNER, voter)
        return voter
    return make


@pytest.fixture
def open_round():
    """Round 1 spanning [100, 200], candidate Alice, started at 150."""
    round_id = rounds.create_round(OWNER, 'Council', 'Council seat', 100, 200)
    alice = candidates.add_candidate(OWNER, round_id, 'Alice', 'Incumbent', 'QmAlice', 'council', 90)
    rounds.start_round(OWNER, round_id, 150)
    return round_id, alice
