"""Password hashing strategies."""

from __future__ import annotations

import bcrypt

from authservice.domain.users.repositories import PasswordHasher

DEFAULT_ROUNDS = 10

# bcrypt only reads the first 72 bytes; newer releases reject longer input.
_BCRYPT_MAX_BYTES = 72


class MalformedHashError(ValueError):
    pass


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Return True on match, False on mismatch.

        Raises :class:`MalformedHashError` when ``hashed`` is not a bcrypt hash.
        """
        try:
            return bcrypt.checkpw(_encode(password), hashed.encode("utf-8"))
        except ValueError as exc:
            raise MalformedHashError("Stored password hash is malformed") from exc
