"""
Data model for authentication: requests, sessions, stored records and
the tagged result returned by the auth gateway.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar, Union

from ..utils.constants import (
    DEFAULT_ROLE,
    STORE_KEYS,
    TOKEN_KEY,
    USER_EMAIL_KEY,
    USER_ID_KEY,
    USER_NAME_KEY,
    USER_ROLE_KEY,
)

T = TypeVar('T')

_DECIMAL = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class Credentials:
    """Login credentials. Only lives for the duration of one call."""
    email: str
    password: str

    def to_payload(self) -> Dict[str, Any]:
        return {"email": self.email, "password": self.password}

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***')"


@dataclass(frozen=True)
class RegistrationRequest:
    """Payload for creating a new account."""
    name: str
    email: str
    password: str
    phone_number: Optional[str] = None
    role: str = DEFAULT_ROLE

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "phoneNumber": self.phone_number,
            "role": self.role,
        }

    def __repr__(self) -> str:
        return (
            f"RegistrationRequest(name={self.name!r}, email={self.email!r}, "
            f"password='***', phone_number={self.phone_number!r}, role={self.role!r})"
        )


@dataclass(frozen=True)
class AuthenticatedSession:
    """A successful authentication as reported by the server."""
    token: str
    user_id: int
    email: str
    name: str
    role: str

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'AuthenticatedSession':
        """
        Build a session from the ``data`` object of a response envelope.

        Raises:
            ValueError: if a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError("session payload is not an object")

        missing = [key for key in ("token", "userId", "email", "name", "role") if data.get(key) is None]
        if missing:
            raise ValueError(f"session payload missing fields: {', '.join(missing)}")

        user_id = data["userId"]
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise ValueError(f"userId is not an integer: {user_id!r}")

        return cls(
            token=str(data["token"]),
            user_id=user_id,
            email=str(data["email"]),
            name=str(data["name"]),
            role=str(data["role"]),
        )

    def __repr__(self) -> str:
        return (
            f"AuthenticatedSession(token='***', user_id={self.user_id!r}, "
            f"email={self.email!r}, name={self.name!r}, role={self.role!r})"
        )


@dataclass(frozen=True)
class UserProfile:
    """User fields of a stored session."""
    user_id: int
    email: str
    name: str
    role: str


@dataclass(frozen=True)
class StoredSessionRecord:
    """
    What the credential store persists for a signed-in user.

    On disk every field is a string; ``user_id`` is written as a decimal
    number and parsed back on read.
    """
    token: str
    user_id: int
    email: str
    name: str
    role: str

    @classmethod
    def from_session(cls, session: AuthenticatedSession) -> 'StoredSessionRecord':
        return cls(
            token=session.token,
            user_id=session.user_id,
            email=session.email,
            name=session.name,
            role=session.role,
        )

    @classmethod
    def decode(cls, fields: Any) -> Optional['StoredSessionRecord']:
        """
        Decode the persisted key/value mapping.

        Anything short of a complete record (a missing key, a non-string
        value, a user id that is not a decimal integer) yields None.
        """
        if not isinstance(fields, dict):
            return None

        values = {}
        for key in STORE_KEYS:
            value = fields.get(key)
            if not isinstance(value, str):
                return None
            values[key] = value

        if not _DECIMAL.fullmatch(values[USER_ID_KEY]):
            return None
        user_id = int(values[USER_ID_KEY])

        return cls(
            token=values[TOKEN_KEY],
            user_id=user_id,
            email=values[USER_EMAIL_KEY],
            name=values[USER_NAME_KEY],
            role=values[USER_ROLE_KEY],
        )

    def encode(self) -> Dict[str, str]:
        return {
            TOKEN_KEY: self.token,
            USER_ID_KEY: str(self.user_id),
            USER_EMAIL_KEY: self.email,
            USER_NAME_KEY: self.name,
            USER_ROLE_KEY: self.role,
        }

    @property
    def is_logged_in(self) -> bool:
        return bool(self.token)

    @property
    def profile(self) -> UserProfile:
        return UserProfile(user_id=self.user_id, email=self.email, name=self.name, role=self.role)

    def __repr__(self) -> str:
        return (
            f"StoredSessionRecord(token='***', user_id={self.user_id!r}, "
            f"email={self.email!r}, name={self.name!r}, role={self.role!r})"
        )


@dataclass(frozen=True)
class Envelope(Generic[T]):
    """The ``{status, message, data}`` wrapper around every response."""
    status: int
    message: Optional[str] = None
    data: Optional[T] = None

    @classmethod
    def from_payload(cls, payload: Any) -> 'Envelope[Any]':
        """
        Raises:
            ValueError: if the payload is not an envelope object
        """
        if not isinstance(payload, dict):
            raise ValueError("response body is not a JSON object")

        status = payload.get("status")
        if isinstance(status, bool) or not isinstance(status, int):
            raise ValueError(f"envelope status is not an integer: {status!r}")

        message = payload.get("message")
        if message is not None and not isinstance(message, str):
            message = str(message)

        return cls(status=status, message=message, data=payload.get("data"))


@dataclass(frozen=True)
class Ok:
    """Successful authentication outcome."""
    session: AuthenticatedSession


@dataclass(frozen=True)
class Failed:
    """
    Failed authentication outcome.

    Transport and server-reported failures look the same here; only
    ``reason`` tells them apart.
    """
    reason: str


AuthOutcome = Union[Ok, Failed]


__all__ = [
    'Credentials',
    'RegistrationRequest',
    'AuthenticatedSession',
    'UserProfile',
    'StoredSessionRecord',
    'Envelope',
    'Ok',
    'Failed',
    'AuthOutcome',
]
