"""User entity held by the registry."""

import uuid
from dataclasses import dataclass, field
from enum import Enum


class UserRole(str, Enum):
    """Roles a user record can hold."""

    CUSTOMER = "customer"
    MANAGER = "manager"
    ADMIN = "admin"


@dataclass
class User:
    """A registered user.

    ``code`` and ``number`` are assigned once by the registry at creation.
    ``code`` is a display reference, not a key; ``id`` is the primary key.
    """

    name: str
    email: str
    password: str
    tax_id: str
    role: UserRole
    code: str
    number: str
    secondary_password: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
