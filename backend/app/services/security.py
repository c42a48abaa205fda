"""Password hashing and session-token helpers.

Session tokens have the form ``ap_sess_<token_id>_<secret>``. The token id is
stored in clear for lookup; only a SHA-256 digest of the secret is kept.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import uuid
from dataclasses import dataclass

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

TOKEN_PREFIX = "ap_sess_"

_hasher = PasswordHasher()


@dataclass(frozen=True)
class ParsedToken:
    token_id: str
    secret: str


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, encoded_hash: str) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _hasher.verify(encoded_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_token() -> tuple[str, str, str]:
    """Return ``(token_id, secret, full_token)``."""

    token_id = uuid.uuid4().hex[:16]
    secret = secrets.token_urlsafe(32)
    return token_id, secret, f"{TOKEN_PREFIX}{token_id}_{secret}"


def parse_token(token: str | None) -> ParsedToken | None:
    """Split a session token; ``None`` when the format is wrong."""

    if not token or not token.startswith(TOKEN_PREFIX):
        return None
    body = token[len(TOKEN_PREFIX) :]
    # token_id is hex, the secret may itself contain '_'
    idx = body.find("_")
    if idx <= 0:
        return None
    token_id, secret = body[:idx], body[idx + 1 :]
    if not secret:
        return None
    return ParsedToken(token_id=token_id, secret=secret)


def digest_secret(secret: str) -> str:
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def secret_matches(secret: str, digest: str) -> bool:
    return hmac.compare_digest(digest_secret(secret), digest)
