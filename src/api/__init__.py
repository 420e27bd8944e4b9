"""HTTP API layer for the user registry.

- **main**: Application factory and lifecycle
- **routes**: User CRUD endpoints
- **dependencies**: Injection of the application's registry
- **middleware**: Request context, request logging and exception handlers
- **schemas**: Pydantic request/response and error models
- **utils**: orjson-backed JSON responses

The API translates between HTTP and the registry; it adds no business
rules of its own.
"""
