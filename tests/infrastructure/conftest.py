"""Pytest fixtures for infrastructure tests."""

import sys
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def add_project_to_path():
    """Add project root to Python path for imports."""
    project_root = Path(__file__).parent.parent.parent
    sys.path.insert(0, str(project_root))
    yield
    # Cleanup
    sys.path.remove(str(project_root))


@pytest.fixture
def iac_project_root():
    """Return the cart_api package directory."""
    return Path(__file__).parent.parent.parent / "cart_api"


@pytest.fixture
def python_files_in_iac(iac_project_root):
    """Return all Python files in the cart_api package."""
    return [f for f in iac_project_root.rglob("*.py") if "__pycache__" not in str(f)]


@pytest.fixture
def make_config():
    """Factory for EnvironmentConfig with test defaults."""
    from cart_api.configs.base import EnvironmentConfig

    def _make(**overrides):
        values = {
            "environment": "dev",
            "model_name": "ShoppingCart",
            "read_capacity": 2,
            "write_capacity": 2,
            "api_description": "test api",
            "stage_name": "prod",
            "retain_table": True,
            "validate_request_body": False,
            "enable_cloudwatch_role": True,
        }
        values.update(overrides)
        return EnvironmentConfig(**values)

    return _make
