"""JSON response class backed by orjson.

Used as the application's default response class. FastAPI has already run
``jsonable_encoder`` over route results by the time ``render`` is called,
so the extra handling here only matters for responses built by hand, such
as the ones returned from exception handlers.
"""

from enum import Enum
from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel


def _default(value: object) -> Any:  # noqa: ANN401 - orjson fallback hook
    """Serialize types orjson does not know about."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Type is not JSON serializable: {type(value).__name__}")


class ORJSONResponse(JSONResponse):
    """Response class rendering content with orjson and sorted keys."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON bytes."""
        return orjson.dumps(content, default=_default, option=orjson.OPT_SORT_KEYS)
