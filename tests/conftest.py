"""Root conftest.py for the user registry test suite.

Project-wide fixtures and pytest configuration.
"""

from typing import Any

import pytest

from src.domain.models import UserRole

# CPFs whose check digits are valid
VALID_TAX_IDS = (
    "111.444.777-35",
    "529.982.247-25",
    "935.411.347-80",
    "123.456.789-09",
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture
def user_fields() -> dict[str, Any]:
    """Provide a complete set of valid user fields.

    Returns:
        dict[str, Any]: Keyword arguments accepted by ``UserRegistry.create``.
    """
    return {
        "name": "Maria Silva",
        "email": "maria@example.com",
        "password": "Str0ng@Pass",
        "tax_id": VALID_TAX_IDS[0],
        "role": UserRole.CUSTOMER,
    }


@pytest.fixture
def valid_tax_ids() -> tuple[str, ...]:
    """Provide distinct CPFs whose check digits are valid."""
    return VALID_TAX_IDS
