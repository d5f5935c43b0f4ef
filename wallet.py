# wallet.py
"""secp256k1 identities and signed request envelopes.

A caller identity is an uncompressed public key in hex ('04' + X + Y). A
request proves it by signing the SHA-256 digest of the canonical JSON of its
method, path, nonce and payload, which binds a signature to one route and one
use.
"""
from ecdsa import SigningKey, VerifyingKey, SECP256k1, BadSignatureError, MalformedPointError
from ecdsa.util import sigdecode_string
import hashlib
import json
import logging

logger = logging.getLogger(__name__)


def generate_keypair():
    """Returns (private_hex, public_hex) with the public key uncompressed."""
    sk = SigningKey.generate(curve=SECP256k1)
    pub_hex = "04" + sk.get_verifying_key().to_string().hex()
    return sk.to_string().hex(), pub_hex


def canonical(message) -> str:
    return json.dumps(message, sort_keys=True, separators=(",", ":"))


def request_digest(method: str, path: str, nonce: int, payload) -> str:
    message = {"method": method.upper(), "path": path, "nonce": nonce, "payload": payload}
    return hashlib.sha256(canonical(message).encode()).hexdigest()


def sign_request(private_key_hex: str, method: str, path: str, nonce: int, payload) -> str:
    """DER signature hex over the request digest (client-side helper)."""
    sk = SigningKey.from_string(bytes.fromhex(private_key_hex), curve=SECP256k1)
    return sk.sign_digest(bytes.fromhex(request_digest(method, path, nonce, payload))).hex()


def _verifying_key(public_key_hex: str) -> VerifyingKey:
    vk_bytes = bytes.fromhex(public_key_hex)
    if len(vk_bytes) == 65 and vk_bytes[0] == 4:
        vk_bytes = vk_bytes[1:]
    return VerifyingKey.from_string(vk_bytes, curve=SECP256k1)


def verify_signature_hex(public_key_hex: str, digest_hex: str, signature_hex: str) -> bool:
    """Accepts raw r||s (64 bytes, as elliptic.js emits) or DER signatures."""
    try:
        vk = _verifying_key(public_key_hex)
        digest = bytes.fromhex(digest_hex)
        sig_bytes = bytes.fromhex(signature_hex)
        if len(sig_bytes) == 64:
            return vk.verify_digest(sig_bytes, digest, sigdecode=sigdecode_string)
        return vk.verify_digest(sig_bytes, digest)
    except BadSignatureError:
        return False
    except (ValueError, TypeError, MalformedPointError) as e:
        logger.warning("rejecting malformed key or signature: %s", e)
        return False


def verify_request(public_key_hex: str, method: str, path: str, nonce: int, payload, signature_hex: str) -> bool:
    return verify_signature_hex(public_key_hex, request_digest(method, path, nonce, payload), signature_hex)
