"""Password Hashing — tests for salted PBKDF2 hashes."""

from introhub.core.passwords import hash_password, verify_password


def test_hash_verifies_original_password():
    stored = hash_password("s3cret!", iterations=1_000)
    assert verify_password("s3cret!", stored)


def test_wrong_password_rejected():
    stored = hash_password("s3cret!", iterations=1_000)
    assert not verify_password("S3cret!", stored)


def test_hash_is_salted():
    assert hash_password("same", iterations=1_000) != hash_password("same", iterations=1_000)


def test_hash_embeds_iteration_count():
    stored = hash_password("pw", iterations=1_234)
    assert stored.startswith("pbkdf2:sha256:1234$")
    assert "pw" not in stored.split("$", 1)[1]


def test_malformed_hashes_return_false():
    assert not verify_password("pw", "")
    assert not verify_password("pw", "plaintext")
    assert not verify_password("pw", "pbkdf2:sha256:abc$salt$digest")
    assert not verify_password("pw", "pbkdf2:sha256:1000$only-two-parts")
