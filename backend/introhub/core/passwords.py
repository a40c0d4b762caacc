"""Password Hashing — salted PBKDF2-HMAC-SHA256 digests.

Invariants:
    - Every hash carries its own random salt and iteration count
    - Stored format: pbkdf2:sha256:<iterations>$<salt hex>$<digest hex>
    - verify_password never raises on malformed input; it returns False

Design Decisions:
    - Iteration count embedded in the stored string: raising it later does not
      invalidate existing hashes
"""

import hashlib
import hmac
import secrets

PBKDF2_ITERATIONS = 100_000
_PREFIX = "pbkdf2:sha256"


def hash_password(password: str, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Hash a password with a fresh 16-byte salt."""
    salt = secrets.token_hex(16)
    dk = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations,
    )
    return f"{_PREFIX}:{iterations}${salt}${dk.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored hash (constant-time compare)."""
    if not password_hash or not password_hash.startswith(_PREFIX + ":"):
        return False
    parts = password_hash.split("$")
    if len(parts) != 3:
        return False
    header, salt, stored_hex = parts
    try:
        iterations = int(header.rsplit(":", 1)[1])
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations,
    )
    return hmac.compare_digest(dk.hex(), stored_hex)
