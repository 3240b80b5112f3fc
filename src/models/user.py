"""
User and Session Models

CRITICAL: Passwords are stored in plaintext. This is a demo pattern
only and must never be used with real credentials.

A Session is a User with the password stripped. It is the only
user-shaped value that leaves the credential store.
"""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """
    A registered user record as persisted.

    No whitespace stripping: email and password comparisons are exact.
    """

    name: str = Field(
        ...,
        description="Display name"
    )
    email: str = Field(
        ...,
        description="Unique key, compared case-sensitively"
    )
    password: str = Field(
        ...,
        description="Plaintext password (demo only)"
    )

    def to_session(self) -> "Session":
        return Session(name=self.name, email=self.email)


class Session(BaseModel):
    """The currently authenticated user, without the password."""
    model_config = ConfigDict(frozen=True)

    name: str
    email: str


class RegistrationResult(BaseModel):
    """Outcome of a registration attempt."""

    success: bool
    message: str
