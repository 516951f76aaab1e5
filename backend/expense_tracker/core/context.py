"""Explicit per-request user identity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserContext:
    """Authenticated caller, passed to every service call.

    Services scope all reads and writes to ``user_id``; nothing about the
    caller is kept in module or request globals.
    """

    user_id: int
    email: str = ""

    @classmethod
    def create(cls, user) -> "UserContext":
        return cls(user_id=user.id, email=user.email or "")

    def __str__(self) -> str:
        return f"UserContext({self.user_id})"
