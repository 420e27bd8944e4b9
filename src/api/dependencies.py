"""FastAPI dependency injection for the user registry.

The registry lives on ``app.state`` and is created by ``create_app``, so
each application instance (and each test client) owns an isolated registry.
Route handlers receive it through the ``Registry`` annotated type.
"""

from typing import Annotated

from fastapi import Depends, Request

from src.domain.registry import UserRegistry


def get_registry(request: Request) -> UserRegistry:
    """Provide the application's registry to a route handler.

    Example:
        @router.get("/users")
        async def list_users(registry: Registry):
            return registry.list_users()
    """
    registry: UserRegistry = request.app.state.registry
    return registry


Registry = Annotated[UserRegistry, Depends(get_registry)]
