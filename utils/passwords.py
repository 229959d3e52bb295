from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError


class PasswordHasher:
    """Salted Argon2 hashing with constant-time verification"""

    def __init__(self):
        self._hasher = PasswordHash.recommended()
        # Verified against when the account does not exist so both failure paths cost the same
        self._dummy_hash = self._hasher.hash("dummy-password-for-timing")

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._hasher.verify(password, password_hash)
        except UnknownHashError:
            return False

    def verify_dummy(self, password: str) -> bool:
        self._hasher.verify(password, self._dummy_hash)
        return False
