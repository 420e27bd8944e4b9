"""User Registry - in-memory user records with validated identity fields.

Architecture Overview:
- **API Layer**: FastAPI routes, middleware and exception handlers
- **Core Layer**: Configuration, logging, request context and errors
- **Domain Layer**: The User entity, field validators and the registry

Every write goes through the registry's validation gate: email shape,
password complexity, CPF tax ID format and check digits, and uniqueness of
email and tax ID. Records live only for the lifetime of the process.
"""
