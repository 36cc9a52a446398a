from eventboard.core.security import (
    ensure_password_hash,
    hash_password,
    is_password_hash,
    verify_password,
)


def test_hash_and_verify():
    digest = hash_password("correct horse")

    assert digest != "correct horse"
    assert digest.startswith("$2")
    assert verify_password("correct horse", digest)
    assert not verify_password("wrong horse", digest)


def test_hash_is_salted():
    assert hash_password("same-password") != hash_password("same-password")


def test_verify_tolerates_missing_or_garbage_digest():
    assert verify_password("anything", None) is False
    assert verify_password("anything", "") is False
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_is_password_hash_heuristic():
    assert is_password_hash(hash_password("password123"))
    assert not is_password_hash("password123")
    # Right prefix, too short to be a digest
    assert not is_password_hash("$2b$short")


def test_ensure_password_hash_does_not_double_hash():
    digest = hash_password("password123")

    assert ensure_password_hash(digest) == digest
    assert ensure_password_hash(None) is None

    hashed = ensure_password_hash("password123")
    assert hashed != "password123"
    assert verify_password("password123", hashed)
