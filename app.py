# app.py
from flask import Flask, request, jsonify, g
from functools import wraps
import logging
import time

from db import init_db
from wallet import verify_request
from models import VotingTypeEnum
import errors
import authority
import rounds, candidates, voters, delegation, ledger, proposals, controls, stats, audit

app = Flask(__name__)

STATUS_CODES = [
    (errors.AuthorizationError, 403),
    (errors.NotFoundError, 404),
    (errors.AlreadyDoneError, 409),
    (errors.StateError, 409),
    (errors.ValidationError, 400),
    (errors.InsufficientStakeError, 400),
]


def current_height():
    """Logical clock supplied to the governance rules (unix seconds)."""
    return int(time.time())


@app.errorhandler(errors.GovernanceError)
def governance_error(e):
    status = next((code for cls, code in STATUS_CODES if isinstance(e, cls)), 400)
    app.logger.warning("%s %s rejected: %s", request.method, request.path, e)
    return jsonify({"error": type(e).__name__, "detail": str(e)}), status


# auth decorator: the caller signs method, path, nonce and payload together
def signed_request(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        body = request.get_json(silent=True) or {}
        caller = body.get("caller")
        payload = body.get("payload")
        nonce = body.get("nonce")
        signature = body.get("signature")
        if (not isinstance(caller, str) or not isinstance(signature, str) or not isinstance(payload, dict)
                or isinstance(nonce, bool) or not isinstance(nonce, int) or not 0 < nonce < 2 ** 63):
            return jsonify({"error": "Unauthorized", "detail": "signed envelope required"}), 401
        if not verify_request(caller, request.method, request.path, nonce, payload, signature):
            return jsonify({"error": "Unauthorized", "detail": "signature verification failed"}), 401
        try:
            authority.consume_nonce(caller, nonce)
        except errors.ReplayError as e:
            app.logger.warning("%s %s replayed by %s", request.method, request.path, caller)
            return jsonify({"error": "Unauthorized", "detail": str(e)}), 401
        g.caller = caller
        g.payload = payload
        return f(*args, **kwargs)
    return wrapper


def field(name, default=None, required=True):
    if name in g.payload:
        return g.payload[name]
    if required:
        raise errors.ValidationError(f"missing field: {name}")
    return default


def int_field(name, default=None, required=True, minimum=None):
    value = field(name, default, required)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise errors.ValidationError(f"field {name} must be an integer")
    if minimum is not None and value < minimum:
        raise errors.ValidationError(f"field {name} must be at least {minimum}")
    return value


def bool_field(name, default=None, required=True):
    value = field(name, default, required)
    if not isinstance(value, bool):
        raise errors.ValidationError(f"field {name} must be true or false")
    return value


### ROUNDS ###
@app.route("/rounds", methods=["POST"])
@signed_request
def create_round():
    voting_type = field("voting_type", "simple", required=False)
    if voting_type not in VotingTypeEnum.__members__:
        raise errors.ValidationError(f"unknown voting type: {voting_type}")
    round_id = rounds.create_round(
        g.caller,
        field("title"),
        field("description", "", required=False),
        int_field("start_time"),
        int_field("end_time"),
        min_participation=int_field("min_participation", 0, required=False),
        voting_type=VotingTypeEnum[voting_type],
    )
    return jsonify({"round_id": round_id}), 201


@app.route("/rounds/<int:round_id>/start", methods=["POST"])
@signed_request
def start_round(round_id):
    rounds.start_round(g.caller, round_id, current_height())
    return jsonify({"ok": True})


@app.route("/rounds/<int:round_id>/finalize", methods=["POST"])
@signed_request
def finalize_round(round_id):
    result = rounds.finalize_round(g.caller, round_id, current_height())
    return jsonify(result)


@app.route("/rounds/<int:round_id>/candidates", methods=["POST"])
@signed_request
def add_candidate(round_id):
    candidate_id = candidates.add_candidate(
        g.caller,
        round_id,
        field("name"),
        field("description", "", required=False),
        field("image_hash"),
        field("category", None, required=False),
        current_height(),
        profile_url=field("profile_url", None, required=False),
        manifesto_hash=field("manifesto_hash", None, required=False),
    )
    return jsonify({"candidate_id": candidate_id}), 201


@app.route("/rounds/<int:round_id>")
def get_round(round_id):
    return jsonify(stats.get_round(round_id))


@app.route("/rounds/<int:round_id>/candidates")
def get_round_candidates(round_id):
    return jsonify(stats.get_round_candidates(round_id))


@app.route("/rounds/<int:round_id>/candidates/<int:candidate_id>")
def get_candidate(round_id, candidate_id):
    return jsonify(stats.get_candidate(candidate_id, round_id))


@app.route("/rounds/<int:round_id>/stats")
def get_election_stats(round_id):
    return jsonify(stats.get_election_stats(round_id))


@app.route("/rounds/<int:round_id>/result")
def get_round_result(round_id):
    return jsonify(stats.get_round_result(round_id))


### VOTERS ###
@app.route("/voters", methods=["POST"])
@signed_request
def register_voter():
    voters.register_voter(g.caller, field("category", None, required=False),
                          int_field("stake", 0, required=False, minimum=0), current_height())
    return jsonify({"ok": True}), 201


@app.route("/voters/<voter>/kyc", methods=["POST"])
@signed_request
def verify_kyc(voter):
    voters.verify_kyc(g.caller, voter)
    return jsonify({"ok": True})


@app.route("/voters/<voter>")
def get_voter(voter):
    return jsonify(stats.get_voter(voter))


@app.route("/voters/<voter>/votes/<int:round_id>")
def get_vote(voter, round_id):
    return jsonify(stats.get_vote(voter, round_id))


### DELEGATION ###
@app.route("/delegations", methods=["POST"])
@signed_request
def delegate_vote():
    delegation.delegate_vote(g.caller, field("delegate"), int_field("round_id"), current_height())
    return jsonify({"ok": True})


@app.route("/delegations/revoke", methods=["POST"])
@signed_request
def revoke_delegation():
    delegation.revoke_delegation(g.caller, int_field("round_id"))
    return jsonify({"ok": True})


@app.route("/delegations/<delegator>/<int:round_id>")
def get_delegation(delegator, round_id):
    return jsonify(stats.get_delegation(delegator, round_id))


### VOTING ###
@app.route("/votes", methods=["POST"])
@signed_request
def cast_vote():
    weight = ledger.cast_vote(
        g.caller,
        int_field("candidate_id"),
        int_field("base_weight", 1, required=False, minimum=0),
        field("verification_hash"),
        current_height(),
        ip_hash=field("ip_hash", None, required=False),
    )
    return jsonify({"weight": weight}), 201


@app.route("/status")
def voting_status():
    return jsonify(stats.get_voting_status())


@app.route("/audit")
def audit_entries():
    start = request.args.get("start", 1, type=int)
    return jsonify({"entries": list(audit.iter_entries(start)), "valid": audit.verify_chain()})


### PROPOSALS ###
@app.route("/proposals", methods=["POST"])
@signed_request
def create_proposal():
    proposal_id = proposals.create_proposal(
        g.caller,
        field("title"),
        field("description", "", required=False),
        field("proposal_type", None, required=False),
        int_field("target_value", 0, required=False),
        int_field("deadline"),
    )
    return jsonify({"proposal_id": proposal_id}), 201


@app.route("/proposals/<int:proposal_id>/votes", methods=["POST"])
@signed_request
def vote_on_proposal(proposal_id):
    weight = proposals.vote_on_proposal(g.caller, proposal_id, bool_field("support"), current_height())
    return jsonify({"weight": weight})


@app.route("/proposals/<int:proposal_id>")
def get_proposal(proposal_id):
    return jsonify(stats.get_proposal(proposal_id))


### ADMIN ###
@app.route("/admin/pause", methods=["POST"])
@signed_request
def emergency_pause():
    ledger.emergency_pause(g.caller)
    return jsonify({"voting_active": False})


@app.route("/admin/config", methods=["POST"])
@signed_request
def update_config():
    controls.update_config(
        g.caller,
        int_field("min_vote_threshold"),
        int_field("max_candidates_per_round"),
        bool_field("require_registration"),
    )
    return jsonify(stats.get_voting_status())


@app.route("/admin/emergency-admin", methods=["POST"])
@signed_request
def set_emergency_admin():
    controls.set_emergency_admin(g.caller, field("admin"))
    return jsonify({"ok": True})


@app.route("/admin/token-voting", methods=["POST"])
@signed_request
def set_token_voting():
    controls.set_token_voting(g.caller, bool_field("enabled"))
    return jsonify({"ok": True})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    app.run(debug=True)
