# src/accounts/tests/conftest.py
import typing as t

import pytest

from accounts import schema
from accounts.models import GatepassUser, Role

PASSWORD = "strong-password-123!"


@pytest.fixture
def valid_register_payload() -> schema.RegisterUserSchema:
    """Provides a valid payload for the user registration endpoint."""
    return schema.RegisterUserSchema(
        name="New Student",
        email="newuser@example.com",
        password="a-Strong-password-123!",
        role=Role.STUDENT,
    )


@pytest.fixture
def user(django_user_model: t.Type[GatepassUser]) -> GatepassUser:
    """A standard student account with a known password."""
    return django_user_model.objects.create_user(
        username="testuser@example.com",
        email="testuser@example.com",
        password=PASSWORD,
        name="Test User",
        role=Role.STUDENT,
    )


@pytest.fixture
def inactive_user(django_user_model: t.Type[GatepassUser]) -> GatepassUser:
    """An inactive user account."""
    return django_user_model.objects.create_user(
        username="inactive@example.com",
        email="inactive@example.com",
        password=PASSWORD,
        is_active=False,
    )
