# backend/utils/hashing.py
from fastapi import Request
from passlib.context import CryptContext

DEFAULT_ROUNDS = 10


# Salted bcrypt hashing; the salt and cost live inside the hash string
class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plain_password: str) -> str:
        return self._context.hash(plain_password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        # False on mismatch; passlib raises ValueError only for a malformed stored hash
        return self._context.verify(plain_password, hashed_password)


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


# Module-level helpers on a default-cost instance, for scripts outside the app
_default_hasher = PasswordHasher()


def get_password_hash(password: str) -> str:
    return _default_hasher.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return _default_hasher.verify(plain_password, hashed_password)
