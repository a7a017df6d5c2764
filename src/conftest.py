"""Project-wide fixtures: users, authenticated clients and test environment tweaks."""

import secrets
import string
import typing as t

import faker
import pytest
from django.core.cache import cache
from django.test.client import Client
from ninja_jwt.tokens import RefreshToken
from pytest import MonkeyPatch

from accounts.models import GatepassUser, Role


@pytest.fixture(autouse=True)
def increase_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """Increase the rate limits to allow testing."""
    for throttle in (
        "AnonDefaultThrottle",
        "UserDefaultThrottle",
        "AuthThrottle",
        "UserRegistrationThrottle",
        "WriteThrottle",
        "PaymentThrottle",
        "GateScanThrottle",
    ):
        monkeypatch.setattr(f"common.throttling.{throttle}.rate", "10000/min")


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously."""
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Throttle history lives in the cache. Start every test without any."""
    cache.clear()


@pytest.fixture(autouse=True)
def media_root(settings: t.Any, tmp_path: t.Any) -> None:
    """Keep uploaded files out of the source tree."""
    settings.MEDIA_ROOT = str(tmp_path / "media")


class GatepassUserFactory:
    """Factory for creating GatepassUser instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> GatepassUser:
        email = kwargs.pop("email", "".join(secrets.choice(string.ascii_lowercase) for _ in range(8)) + "@user.test")
        username = kwargs.pop("username", email)
        password = kwargs.pop("password", "password")
        name = kwargs.pop("name", self.fake.name())
        role = kwargs.pop("role", Role.STUDENT)
        return GatepassUser.objects.create_user(
            username=username,
            email=email,
            password=password,
            name=name,
            role=role,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> GatepassUser:
        return self.create_user(**kwargs)


@pytest.fixture
def gatepass_user_factory() -> GatepassUserFactory:
    return GatepassUserFactory()


def auth_client(user: GatepassUser) -> Client:
    """A test client sending a bearer access token for ``user``."""
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")  # type: ignore[attr-defined]


@pytest.fixture
def student(gatepass_user_factory: GatepassUserFactory) -> GatepassUser:
    return gatepass_user_factory(email="student@college.test", name="Asha Rao", role=Role.STUDENT)


@pytest.fixture
def other_student(gatepass_user_factory: GatepassUserFactory) -> GatepassUser:
    return gatepass_user_factory(email="other.student@college.test", name="Ravi Kumar", role=Role.STUDENT)


@pytest.fixture
def organizer(gatepass_user_factory: GatepassUserFactory) -> GatepassUser:
    return gatepass_user_factory(email="organizer@college.test", name="Dr. Meera Iyer", role=Role.ORGANIZER)


@pytest.fixture
def other_organizer(gatepass_user_factory: GatepassUserFactory) -> GatepassUser:
    return gatepass_user_factory(email="other.organizer@college.test", name="Prof. Sen", role=Role.ORGANIZER)


@pytest.fixture
def platform_admin(gatepass_user_factory: GatepassUserFactory) -> GatepassUser:
    return gatepass_user_factory(email="admin@college.test", name="Admin", role=Role.ADMIN, is_staff=True)


@pytest.fixture
def student_client(student: GatepassUser) -> Client:
    return auth_client(student)


@pytest.fixture
def other_student_client(other_student: GatepassUser) -> Client:
    return auth_client(other_student)


@pytest.fixture
def organizer_client(organizer: GatepassUser) -> Client:
    return auth_client(organizer)


@pytest.fixture
def other_organizer_client(other_organizer: GatepassUser) -> Client:
    return auth_client(other_organizer)


@pytest.fixture
def platform_admin_client(platform_admin: GatepassUser) -> Client:
    return auth_client(platform_admin)
