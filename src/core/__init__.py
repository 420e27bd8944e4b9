"""Cross-cutting infrastructure shared by the domain and API layers.

- **config**: Settings loaded from the environment and .env files
- **context**: Correlation and request IDs for the current request
- **exceptions**: Error kinds and the exception hierarchy built on them
- **error_context**: Redaction of passwords and tax IDs before logging
- **logging**: Loguru setup with console and JSON formatters
"""
