"""Credential store package."""

from src.services.auth.credential_store import (
    DUPLICATE_EMAIL_MESSAGE,
    REGISTERED_MESSAGE,
    SESSION_KEY,
    USERS_KEY,
    CredentialStore,
)

__all__ = [
    "DUPLICATE_EMAIL_MESSAGE",
    "REGISTERED_MESSAGE",
    "SESSION_KEY",
    "USERS_KEY",
    "CredentialStore",
]
