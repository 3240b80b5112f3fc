"""
Credential Store

Manages registered users and the single persisted session slot.

CRITICAL: This is a demo credential store. Passwords are kept in
plaintext in the storage substrate. Do not reuse real passwords.

Login failure is deliberately generic: an unknown email and a wrong
password produce the same result.
"""

from typing import Optional

from src.audit import AuditLogger
from src.models.user import RegistrationResult, Session, User
from src.services.storage import KeyValueStorage


USERS_KEY = "pft_users"
SESSION_KEY = "pft_current_user"

DUPLICATE_EMAIL_MESSAGE = "Email already registered"
REGISTERED_MESSAGE = "Registered successfully"


class CredentialStore:
    """
    Registration, login and session tracking over key-value storage.

    Persisted layout:
    - users_key:   JSON array of {name, email, password}
    - session_key: JSON object {name, email}, or absent
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        audit_logger: Optional[AuditLogger] = None,
        users_key: str = USERS_KEY,
        session_key: str = SESSION_KEY,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._users_key = users_key
        self._session_key = session_key

    def _get_users(self) -> list[User]:
        return [User.model_validate(raw) for raw in self._storage.get_json(self._users_key, [])]

    def _save_users(self, users: list[User]) -> None:
        self._storage.set_json(self._users_key, [u.model_dump() for u in users])

    def list_users(self) -> list[User]:
        """All registered users, in registration order."""
        return self._get_users()

    def register(self, user: User) -> RegistrationResult:
        """
        Register a new user.

        Emails are compared exactly (case-sensitive). A duplicate is
        reported in the result and leaves the existing record untouched.
        """
        users = self._get_users()

        if any(u.email == user.email for u in users):
            self._audit_logger.log_registration_rejected(user.email, DUPLICATE_EMAIL_MESSAGE)
            return RegistrationResult(success=False, message=DUPLICATE_EMAIL_MESSAGE)

        users.append(user)
        self._save_users(users)
        self._audit_logger.log_user_registered(user.email)
        return RegistrationResult(success=True, message=REGISTERED_MESSAGE)

    def login(self, email: str, password: str) -> Optional[Session]:
        """
        Log in with an exact email and password match.

        Returns:
            The new Session (also persisted), or None on any mismatch
        """
        found = next(
            (u for u in self._get_users() if u.email == email and u.password == password),
            None,
        )

        if found is None:
            self._audit_logger.log_login_failed(email)
            return None

        session = found.to_session()
        self._storage.set_json(self._session_key, session.model_dump())
        self._audit_logger.log_login_succeeded(session.email)
        return session

    def logout(self, session: Optional[Session] = None) -> None:
        """
        Clear the session slot. Safe to call when nobody is logged in.

        The slot is removed without being read, so a corrupt session
        record can always be cleared. `session` only labels the audit event.
        """
        self._storage.remove_item(self._session_key)
        self._audit_logger.log_logged_out(session.email if session else None)

    def get_current_user(self) -> Optional[Session]:
        raw = self._storage.get_json(self._session_key)
        if raw is None:
            return None
        return Session.model_validate(raw)

    def is_authenticated(self) -> bool:
        return self.get_current_user() is not None
