"""In-memory user registry.

The registry owns the live collection of users and gates every write behind
the same ordered set of checks (``UserRegistry.check``). The first failing
check decides the reported error and nothing is mutated on failure.

Each application builds its own registry instance; nothing here is module
level state, so tests can create as many isolated registries as they need.
"""

import time

from loguru import logger

from src.core.exceptions import (
    ConflictError,
    ErrorCode,
    NotFoundError,
    RegistryError,
    ValidationError,
)
from src.domain.models import User, UserRole
from src.domain.validators import is_valid_email, is_valid_password, is_valid_tax_id

ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_EMAIL: "Invalid email",
    ErrorCode.INVALID_PASSWORD: "Invalid password",
    ErrorCode.INVALID_SECONDARY_PASSWORD: "Invalid secondary password",
    ErrorCode.EMAIL_IN_USE: "Email already in use",
    ErrorCode.TAX_ID_IN_USE: "Tax ID already in use",
    ErrorCode.INVALID_TAX_ID: "Invalid tax ID",
    ErrorCode.USER_NOT_FOUND: "User not found",
}

_ERROR_FIELDS: dict[ErrorCode, str] = {
    ErrorCode.INVALID_EMAIL: "email",
    ErrorCode.INVALID_PASSWORD: "password",
    ErrorCode.INVALID_SECONDARY_PASSWORD: "secondary_password",
    ErrorCode.EMAIL_IN_USE: "email",
    ErrorCode.TAX_ID_IN_USE: "tax_id",
    ErrorCode.INVALID_TAX_ID: "tax_id",
}


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _coerce_role(role: UserRole | str) -> UserRole:
    try:
        return UserRole(role)
    except ValueError as e:
        raise ValidationError(
            "Invalid role", context={"field": "role", "role": str(role)}, cause=e
        ) from e


def error_for(code: ErrorCode, user_id: str | None = None) -> RegistryError:
    """Build the exception reported for a registry error kind.

    Args:
        code: The failing check's error kind.
        user_id: The id involved, for USER_NOT_FOUND.

    Returns:
        RegistryError: ValidationError, ConflictError or NotFoundError.
    """
    message = ERROR_MESSAGES[code]

    if code is ErrorCode.USER_NOT_FOUND:
        return NotFoundError(message, error_code=code, context={"user_id": user_id})

    context = {"field": _ERROR_FIELDS[code]}
    if code in (ErrorCode.EMAIL_IN_USE, ErrorCode.TAX_ID_IN_USE):
        return ConflictError(message, error_code=code, context=context)
    return ValidationError(message, error_code=code, context=context)


class UserRegistry:
    """Owns the user records and enforces their validation and uniqueness.

    Args:
        exclude_self_on_update: When True, ``update`` ignores the record being
            updated in the email and tax ID uniqueness checks. When False, a
            user resubmitting their own current email or tax ID is reported as
            EMAIL_IN_USE / TAX_ID_IN_USE.
    """

    def __init__(self, *, exclude_self_on_update: bool = False) -> None:
        self._users: list[User] = []
        self.exclude_self_on_update = exclude_self_on_update

    def __len__(self) -> int:
        return len(self._users)

    def _find(self, user_id: str) -> User | None:
        return next((user for user in self._users if user.id == user_id), None)

    def _is_email_in_use(self, email: str, exclude_id: str | None) -> bool:
        return any(u.email == email and u.id != exclude_id for u in self._users)

    def _is_tax_id_in_use(self, tax_id: str, exclude_id: str | None) -> bool:
        return any(u.tax_id == tax_id and u.id != exclude_id for u in self._users)

    def check(
        self,
        email: str,
        password: str,
        tax_id: str,
        secondary_password: str | None = None,
        exclude_id: str | None = None,
    ) -> ErrorCode | None:
        """Run the write gate and return the first failing error kind.

        Checks run in a fixed order and stop at the first failure: email
        shape, password, secondary password (only when non-empty), email
        uniqueness, tax ID uniqueness, tax ID format and check digits.

        Args:
            email: Email to validate.
            password: Password to validate.
            tax_id: Tax ID to validate.
            secondary_password: Optional elevated-privilege password.
            exclude_id: Record id ignored by the uniqueness checks.

        Returns:
            ErrorCode | None: The failing kind, or None if every check passes.
        """
        if not is_valid_email(email):
            return ErrorCode.INVALID_EMAIL
        if not is_valid_password(password):
            return ErrorCode.INVALID_PASSWORD
        if secondary_password and not is_valid_password(secondary_password):
            return ErrorCode.INVALID_SECONDARY_PASSWORD
        if self._is_email_in_use(email, exclude_id):
            return ErrorCode.EMAIL_IN_USE
        if self._is_tax_id_in_use(tax_id, exclude_id):
            return ErrorCode.TAX_ID_IN_USE
        if not is_valid_tax_id(tax_id):
            return ErrorCode.INVALID_TAX_ID
        return None

    def _guard(
        self,
        email: str,
        password: str,
        tax_id: str,
        secondary_password: str | None,
        exclude_id: str | None = None,
        user_id: str | None = None,
    ) -> None:
        if code := self.check(
            email, password, tax_id, secondary_password, exclude_id=exclude_id
        ):
            logger.info(
                "User write rejected: {}",
                code.value,
                error_code=code.value,
                user_id=user_id,
            )
            raise error_for(code)

    def create(
        self,
        name: str,
        email: str,
        password: str,
        tax_id: str,
        role: UserRole | str,
        secondary_password: str | None = None,
    ) -> User:
        """Validate and append a new user.

        Args:
            name: Display name.
            email: Unique email address.
            password: Password satisfying the complexity policy.
            tax_id: Unique tax ID in ``DDD.DDD.DDD-DD`` form.
            role: The user's role, as a UserRole or its value.
            secondary_password: Optional elevated-privilege password.

        Returns:
            User: The stored record, with ``code`` and ``number`` assigned.

        Raises:
            ValidationError: A field or the role is malformed.
            ConflictError: The email or tax ID already belongs to a record.
        """
        self._guard(email, password, tax_id, secondary_password)
        role = _coerce_role(role)

        count = len(self._users)
        user = User(
            name=name,
            email=email,
            password=password,
            tax_id=tax_id,
            role=role,
            code=f"{_now_ms()}{count}",
            number=str(count + 1),
            secondary_password=secondary_password,
        )
        self._users.append(user)

        logger.info("User created", user_id=user.id, number=user.number)
        return user

    def update(
        self,
        user_id: str,
        name: str,
        email: str,
        password: str,
        tax_id: str,
        role: UserRole | str,
        secondary_password: str | None = None,
    ) -> User:
        """Validate and overwrite an existing user's fields.

        The fields are checked before the record is looked up, so invalid
        fields are reported even for an unknown ``user_id``.
        ``secondary_password`` replaces the stored value only when a non-empty
        value is given. ``code`` and ``number`` never change.

        Raises:
            ValidationError: A field or the role is malformed.
            NotFoundError: No record has ``user_id``.
            ConflictError: The email or tax ID already belongs to a record.
        """
        exclude_id = user_id if self.exclude_self_on_update else None
        self._guard(
            email, password, tax_id, secondary_password, exclude_id, user_id=user_id
        )

        user = self._find(user_id)
        if user is None:
            raise error_for(ErrorCode.USER_NOT_FOUND, user_id)
        role = _coerce_role(role)

        user.name = name
        user.email = email
        user.password = password
        user.tax_id = tax_id
        user.role = role
        if secondary_password:
            user.secondary_password = secondary_password

        logger.info("User updated", user_id=user.id)
        return user

    def delete(self, user_id: str) -> None:
        """Remove the user with ``user_id``; unknown ids are ignored."""
        remaining = [user for user in self._users if user.id != user_id]
        if len(remaining) != len(self._users):
            logger.info("User deleted", user_id=user_id)
        self._users = remaining

    def get_by_id(self, user_id: str) -> User:
        """Return the user with ``user_id``.

        Raises:
            NotFoundError: No record has ``user_id``.
        """
        user = self._find(user_id)
        if user is None:
            raise error_for(ErrorCode.USER_NOT_FOUND, user_id)
        return user

    def list_users(self) -> list[User]:
        """Return all users in insertion order."""
        return list(self._users)
