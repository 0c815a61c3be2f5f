# auth/password.py
from __future__ import annotations

import bcrypt

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hashing with a fixed work factor.

    Passwords are cut to their first 72 bytes, so longer passwords that share
    that prefix verify against each other.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(self._encode(password), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time check; False for a mismatch or an unusable stored hash."""
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode())
        except (ValueError, TypeError):
            return False

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
