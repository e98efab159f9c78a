from __future__ import annotations

import hashlib
import hmac
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "app"
sys.path.insert(0, str(APP_DIR))

import commit_reveal  # type: ignore[import-not-found]  # noqa: E402
from commit_reveal import (  # type: ignore[import-not-found]  # noqa: E402
    KEY_BYTES,
    compute_commitment,
    format_key,
    generate_key,
    parse_key,
    require_commitment,
    verify_commitment,
)
from protocol import EntropyUnavailable, IntegrityViolation, MoveSet  # type: ignore[import-not-found]  # noqa: E402

KEY = bytes(range(32))
MOVES = MoveSet.from_names(["rock", "paper", "scissors", "lizard", "spock"])


def test_commitment_is_hmac_sha256_of_move_name() -> None:
    expected = hmac.new(KEY, b"scissors", hashlib.sha256).hexdigest()
    assert compute_commitment(KEY, "scissors") == expected
    assert compute_commitment(KEY, MOVES.move("scissors")) == expected
    assert len(expected) == 64


def test_commitment_is_deterministic() -> None:
    assert compute_commitment(KEY, "rock") == compute_commitment(KEY, "rock")


def test_verify_accepts_own_commitment() -> None:
    for move in MOVES:
        key = generate_key()
        assert verify_commitment(key, move, compute_commitment(key, move))


def test_distinct_moves_give_distinct_commitments() -> None:
    tags = {compute_commitment(KEY, move) for move in MOVES}
    assert len(tags) == len(MOVES)


def test_distinct_keys_give_distinct_commitments() -> None:
    other = bytes(reversed(range(32)))
    assert compute_commitment(KEY, "rock") != compute_commitment(other, "rock")


def test_generate_key_is_256_bits_and_never_repeats() -> None:
    keys = {generate_key() for _ in range(2000)}
    assert len(keys) == 2000
    assert all(len(k) == KEY_BYTES == 32 for k in keys)


def test_generate_key_reports_missing_entropy(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(n: int) -> bytes:
        raise OSError("getrandom failed")

    monkeypatch.setattr(commit_reveal.secrets, "token_bytes", broken)
    with pytest.raises(EntropyUnavailable):
        generate_key()


def test_tampered_move_fails_verification() -> None:
    tag = compute_commitment(KEY, "scissors")
    assert not verify_commitment(KEY, "rock", tag)
    with pytest.raises(IntegrityViolation):
        require_commitment(KEY, "rock", tag)


def test_wrong_key_fails_verification() -> None:
    tag = compute_commitment(KEY, "scissors")
    with pytest.raises(IntegrityViolation):
        require_commitment(generate_key(), "scissors", tag)


def test_require_commitment_passes_for_honest_reveal() -> None:
    require_commitment(KEY, "scissors", compute_commitment(KEY, "scissors"))


def test_verify_tolerates_uppercase_hex_and_rejects_garbage() -> None:
    tag = compute_commitment(KEY, "paper")
    assert verify_commitment(KEY, "paper", tag.upper())
    assert not verify_commitment(KEY, "paper", "")
    assert not verify_commitment(KEY, "paper", "é" * 64)


def test_verify_uses_constant_time_comparison(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str]] = []
    real = hmac.compare_digest

    def spy(a, b):  # type: ignore[no-untyped-def]
        calls.append((a, b))
        return real(a, b)

    monkeypatch.setattr(commit_reveal.hmac, "compare_digest", spy)
    tag = compute_commitment(KEY, "lizard")
    assert verify_commitment(KEY, "lizard", tag)
    assert not verify_commitment(KEY, "spock", tag)
    assert len(calls) == 2


def test_key_hex_roundtrip_and_validation() -> None:
    assert parse_key(format_key(KEY)) == KEY
    with pytest.raises(ValueError):
        parse_key("zz" * 32)
    with pytest.raises(ValueError):
        parse_key("ab" * 16)
