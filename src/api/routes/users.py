"""User endpoints.

Handlers are thin: they unpack the request model, call the registry and
wrap the result. Registry errors propagate to the exception handlers, which
map them to 400, 404 and 409 responses.
"""

from fastapi import APIRouter, Response, status

from src.api.dependencies import Registry
from src.api.schemas.users import UserCreate, UserResponse, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreate, registry: Registry) -> UserResponse:
    """Create a user after validating its fields and uniqueness."""
    user = registry.create(
        name=body.name,
        email=body.email,
        password=body.password,
        tax_id=body.tax_id,
        role=body.role,
        secondary_password=body.secondary_password,
    )
    return UserResponse.from_user(user)


@router.get("")
async def list_users(registry: Registry) -> list[UserResponse]:
    """List all users in creation order."""
    return [UserResponse.from_user(user) for user in registry.list_users()]


@router.get("/{user_id}")
async def get_user(user_id: str, registry: Registry) -> UserResponse:
    """Get a single user by id."""
    return UserResponse.from_user(registry.get_by_id(user_id))


@router.put("/{user_id}")
async def update_user(
    user_id: str, body: UserUpdate, registry: Registry
) -> UserResponse:
    """Replace a user's fields.

    The stored secondary password is kept when none is sent.
    """
    user = registry.update(
        user_id,
        name=body.name,
        email=body.email,
        password=body.password,
        tax_id=body.tax_id,
        role=body.role,
        secondary_password=body.secondary_password,
    )
    return UserResponse.from_user(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_user(user_id: str, registry: Registry) -> Response:
    """Delete a user. Deleting an unknown id succeeds."""
    registry.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
