from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError


class AuthService:
    """Use case: unlock the admin panel with the shared admin password."""

    def __init__(self, password_hash: str):
        self._password_hash = password_hash

    @classmethod
    def from_plain_password(cls, password: str) -> "AuthService":
        return cls(generate_password_hash(password))

    def authenticate(self, password: str) -> None:
        try:
            ok = bool(password) and check_password_hash(self._password_hash, password)
        except ValueError:
            # e.g. a corrupted or placeholder hash
            ok = False

        if not ok:
            raise AuthenticationError("Password non corretta")
