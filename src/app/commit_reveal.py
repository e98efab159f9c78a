from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from typing import Final

from protocol import EntropyUnavailable, IntegrityViolation, Move

SCHEME_ID: Final[str] = "hmac-sha256"
KEY_BYTES: Final[int] = 32

logger = logging.getLogger(__name__)


def generate_key(num_bytes: int = KEY_BYTES) -> bytes:
    # OS CSPRNG only; never fall back to the random module.
    try:
        return secrets.token_bytes(num_bytes)
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailable(f"cannot read {num_bytes} bytes from the secure random source: {exc}") from exc


def canonical_message(move: Move | str) -> bytes:
    name = move.name if isinstance(move, Move) else move
    return name.encode("utf-8")


def compute_commitment(key: bytes, move: Move | str) -> str:
    return hmac.new(key, canonical_message(move), hashlib.sha256).hexdigest()


def verify_commitment(key: bytes, move: Move | str, expected_commitment: str) -> bool:
    computed = compute_commitment(key, move)
    expected = expected_commitment.strip().lower()
    if not expected.isascii():
        return False
    return hmac.compare_digest(expected, computed)


def require_commitment(key: bytes, move: Move | str, expected_commitment: str) -> None:
    """Audit step: raise unless ``move`` under ``key`` reproduces the published tag."""
    if not verify_commitment(key, move, expected_commitment):
        name = move.name if isinstance(move, Move) else move
        logger.debug("commitment mismatch for move %r", name)
        raise IntegrityViolation(f"revealed move {name!r} does not match commitment {expected_commitment}")


def format_key(key: bytes) -> str:
    return key.hex()


def parse_key(text: str) -> bytes:
    try:
        key = bytes.fromhex(text.strip())
    except ValueError as exc:
        raise ValueError(f"key must be hex encoded: {exc}") from None
    if len(key) != KEY_BYTES:
        raise ValueError(f"key must be {KEY_BYTES} bytes ({KEY_BYTES * 2} hex chars), got {len(key)}")
    return key
