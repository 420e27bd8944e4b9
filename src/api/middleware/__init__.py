"""Middleware and exception handlers applied to every request.

- **RequestContextMiddleware**: correlation and request IDs
- **RequestLoggingMiddleware**: request start/completion logs with timing
- **error_handler**: maps exceptions to ``ErrorResponse`` bodies

Middleware run in reverse order of registration, so the request context is
set up before the logging middleware emits its first line.
"""
