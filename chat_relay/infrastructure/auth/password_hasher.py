"""
Password hashing with salted PBKDF2-HMAC-SHA256.

Stored format: "pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>".
Random per-user salts, constant-time comparison.
"""

import hashlib
import secrets

from chat_relay.domain.ports.identity import PasswordHasher

ALGORITHM = "pbkdf2_sha256"


class Pbkdf2PasswordHasher(PasswordHasher):
    def __init__(self, iterations: int = 100_000):
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self._iterations = iterations

    def _derive(self, password: str, salt: bytes, iterations: int) -> str:
        return hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt, iterations
        ).hex()

    def hash(self, password: str) -> str:
        salt = secrets.token_bytes(16)
        digest = self._derive(password, salt, self._iterations)
        return f"{ALGORITHM}${self._iterations}${salt.hex()}${digest}"

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            algorithm, iterations, salt_hex, expected = password_hash.split("$")
            if algorithm != ALGORITHM:
                return False
            digest = self._derive(password, bytes.fromhex(salt_hex), int(iterations))
        except ValueError:
            return False
        return secrets.compare_digest(digest, expected)
