"""
User aggregate - data model, factory and lifecycle stamping.

A User owns zero or more Phone records. Phones reference their owner by
id only, so the aggregate never forms an object cycle.

Lifecycle stamping is explicit: repositories call stamp_created() on the
first save and stamp_modified() on every later save. Nothing else sets
timestamps.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID

from .exceptions import InvalidFormat, UnexpectedError

MAX_TOKEN_LENGTH = 500
MAX_FIELD_LENGTH = 255


@dataclass(frozen=True)
class PhoneInput:
    """Phone data as submitted with a registration request."""

    number: str
    city_code: str
    country_code: str


@dataclass
class Phone:
    """Phone record owned by a User."""

    number: str
    city_code: str
    country_code: str
    user_id: UUID


@dataclass
class User:
    """User aggregate root."""

    id: UUID
    name: str
    email: str
    password: str
    token: str
    is_active: bool = True
    phones: list[Phone] = field(default_factory=list)
    created: datetime | None = None
    modified: datetime | None = None
    last_login: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.created is not None


@dataclass(frozen=True)
class UserView:
    """
    Public projection of a persisted User.

    Deliberately excludes name, email, password and phone numbers.
    """

    id: UUID
    created: datetime | None
    modified: datetime | None
    last_login: datetime | None
    token: str
    is_active: bool


def build_user(
    name: str,
    email: str,
    password: str,
    token: str,
    user_id: UUID,
    phones: list[PhoneInput] | None = None,
    is_active: bool = True,
) -> User:
    """
    Build an in-memory User with its owned Phone records.

    Timestamps are left unset; the repository stamps them at save time.

    Args:
        name: Display name
        email: Email exactly as submitted
        password: Password, stored as given
        token: Issued bearer token
        user_id: Identity key generated for this registration
        phones: Submitted phones; None or empty yields a user without phones
        is_active: Active flag, true unless overridden

    Raises:
        InvalidFormat: If a phone field is blank, or any text field is longer
            than MAX_FIELD_LENGTH
    """
    for label, value in (("Name", name), ("Email", email), ("Password", password)):
        _require_length(label, value)
    if len(token) > MAX_TOKEN_LENGTH:
        raise UnexpectedError(f"Issued token exceeds {MAX_TOKEN_LENGTH} characters")

    owned = []
    for phone in phones or ():
        _require_phone_fields(phone)
        owned.append(
            Phone(
                number=phone.number,
                city_code=phone.city_code,
                country_code=phone.country_code,
                user_id=user_id,
            )
        )

    return User(
        id=user_id,
        name=name,
        email=email,
        password=password,
        token=token,
        is_active=is_active,
        phones=owned,
    )


def _require_phone_fields(phone: PhoneInput) -> None:
    for label, value in (
        ("number", phone.number),
        ("city code", phone.city_code),
        ("country code", phone.country_code),
    ):
        if not value or not value.strip():
            raise InvalidFormat(f"Phone {label} is required")
        _require_length(f"Phone {label}", value)


def _require_length(label: str, value: str) -> None:
    if len(value) > MAX_FIELD_LENGTH:
        raise InvalidFormat(f"{label} exceeds {MAX_FIELD_LENGTH} characters")


def stamp_created(user: User, now: datetime) -> User:
    """Set created, modified and last_login to the same instant."""
    user.created = now
    user.modified = now
    user.last_login = now
    return user


def stamp_modified(user: User, now: datetime) -> User:
    """Restamp modified; created never changes."""
    user.modified = now
    return user


def to_view(user: User) -> UserView:
    """Project a persisted User into its public view."""
    return UserView(
        id=user.id,
        created=user.created,
        modified=user.modified,
        last_login=user.last_login,
        token=user.token,
        is_active=user.is_active,
    )


def copy_user(user: User) -> User:
    """Detached copy of the aggregate, phones included."""
    return replace(user, phones=[replace(phone) for phone in user.phones])
