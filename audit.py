import hashlib, json
from typing import List, Dict, Any, Iterator
from models import AuditEntry
from db import reader

GENESIS_HASH = "0" * 64


def compute_hash(entry: Dict[str, Any], previous_hash: str) -> str:
    entry_string = json.dumps({
        "id": entry["id"],
        "voter": entry["voter"],
        "candidate_id": entry["candidate_id"],
        "round_id": entry["round_id"],
        "timestamp": entry["timestamp"],
        "verification_hash": entry["verification_hash"],
        "ip_hash": entry["ip_hash"],
        "previous_hash": previous_hash,
    }, sort_keys=True)
    return hashlib.sha256(entry_string.encode()).hexdigest()


def record(db, state, voter, candidate_id, round_id, verification_hash, now, ip_hash=None) -> int:
    """Append one accepted vote; runs inside the caller's transaction."""
    last = db.get(AuditEntry, state.audit_counter) if state.audit_counter else None
    previous_hash = last.entry_hash if last is not None else GENESIS_HASH

    state.audit_counter += 1
    fields = {
        "id": state.audit_counter,
        "voter": voter,
        "candidate_id": candidate_id,
        "round_id": round_id,
        "timestamp": now,
        "verification_hash": verification_hash,
        "ip_hash": ip_hash,
    }
    entry = AuditEntry(previous_hash=previous_hash, entry_hash=compute_hash(fields, previous_hash), **fields)
    db.add(entry)
    return entry.id


def iter_entries(start: int = 1) -> Iterator[Dict[str, Any]]:
    with reader() as db:
        rows = db.query(AuditEntry).filter(AuditEntry.id >= start).order_by(AuditEntry.id).all()
        entries: List[Dict[str, Any]] = [e.to_dict() for e in rows]
    return iter(entries)


def verify_chain() -> bool:
    previous_hash = GENESIS_HASH
    expected_id = 1
    for e in iter_entries():
        if e["id"] != expected_id:
            return False
        if e["previous_hash"] != previous_hash:
            return False
        if compute_hash(e, previous_hash) != e["entry_hash"]:
            return False
        previous_hash = e["entry_hash"]
        expected_id += 1
    return True
