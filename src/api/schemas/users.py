"""Request and response models for the user endpoints.

Field values are accepted as plain strings: email, password and tax ID
rules belong to the registry so that every rejection carries its specific
error code instead of a generic request validation error.
"""

from pydantic import BaseModel, Field

from src.domain.models import User, UserRole


class UserWrite(BaseModel):
    """Fields accepted when creating or updating a user."""

    name: str = Field(
        ...,
        description="Display name",
        examples=["Maria Silva"],
    )

    email: str = Field(
        ...,
        description="Email address, unique across users",
        examples=["maria@example.com"],
    )

    password: str = Field(
        ...,
        description=(
            "At least 8 characters with lowercase, uppercase, digit and one of "
            "@$!%*?&"
        ),
        examples=["Str0ng@Pass"],
    )

    tax_id: str = Field(
        ...,
        description="CPF formatted as DDD.DDD.DDD-DD, unique across users",
        examples=["111.444.777-35"],
    )

    role: UserRole = Field(
        ...,
        description="User role",
        examples=["customer", "manager", "admin"],
    )

    secondary_password: str | None = Field(
        default=None,
        description="Optional elevated-privilege password, same policy as password",
        examples=["Adm1n@Pass"],
    )


class UserCreate(UserWrite):
    """Body of ``POST /users``."""


class UserUpdate(UserWrite):
    """Body of ``PUT /users/{user_id}``.

    Omitting ``secondary_password`` keeps the stored one.
    """


class UserResponse(BaseModel):
    """A user as returned by the API. Passwords are never included."""

    id: str = Field(..., description="Primary key")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    tax_id: str = Field(..., description="CPF formatted as DDD.DDD.DDD-DD")
    role: UserRole = Field(..., description="User role")
    code: str = Field(..., description="Display reference assigned at creation")
    number: str = Field(..., description="Sequence number assigned at creation")
    has_secondary_password: bool = Field(
        ..., description="Whether an elevated-privilege password is set"
    )

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Build the response model from a registry record."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            tax_id=user.tax_id,
            role=user.role,
            code=user.code,
            number=user.number,
            has_secondary_password=bool(user.secondary_password),
        )
