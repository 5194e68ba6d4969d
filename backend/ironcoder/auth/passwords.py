"""Password schemes: how a password becomes the secret stored on disk."""
import hmac

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

ARGON2 = "argon2"
PLAINTEXT = "plaintext"
SCHEMES = (ARGON2, PLAINTEXT)


class Argon2Scheme:
    """Salted argon2id hashes, e.g. `$argon2id$v=19$m=65536,t=3,p=4$...`."""

    name = ARGON2

    def __init__(self, hasher: PasswordHasher = None):
        self._ph = hasher or PasswordHasher()

    def encode(self, plain_password: str) -> str:
        return self._ph.hash(plain_password)

    def matches(self, stored: str, plain_password: str) -> bool:
        """
        Check a plain password against a stored argon2 hash.

        A stored value that is not a valid argon2 hash (e.g. a plaintext
        line left over from an older file) never matches.
        """
        try:
            return self._ph.verify(stored, plain_password)
        except (VerificationError, InvalidHashError):
            return False


class PlaintextScheme:
    """Stores the password verbatim. Only for reading legacy files."""

    name = PLAINTEXT

    def encode(self, plain_password: str) -> str:
        return plain_password

    def matches(self, stored: str, plain_password: str) -> bool:
        return hmac.compare_digest(stored.encode(), plain_password.encode())


def get_scheme(name: str = ARGON2, hasher: PasswordHasher = None):
    """Return the password scheme registered under `name`."""
    if name == ARGON2:
        return Argon2Scheme(hasher)
    if name == PLAINTEXT:
        return PlaintextScheme()
    raise ValueError(f"Unknown password scheme '{name}'. Expected one of {SCHEMES}.")
