import pytest

from accounts.models import GatepassUser, Role

pytestmark = pytest.mark.django_db


def test_display_name_prefers_name(django_user_model: type[GatepassUser]) -> None:
    user = django_user_model.objects.create_user(username="a@b.test", email="a@b.test", password="pw", name="Asha Rao")

    assert user.display_name == "Asha Rao"


def test_display_name_falls_back_to_email_local_part(django_user_model: type[GatepassUser]) -> None:
    user = django_user_model.objects.create_user(username="ravi_kumar@b.test", email="ravi_kumar@b.test", password="pw")

    assert user.display_name == "Ravi Kumar"


def test_default_role_is_student(django_user_model: type[GatepassUser]) -> None:
    user = django_user_model.objects.create_user(username="s@b.test", email="s@b.test", password="pw")

    assert user.role == Role.STUDENT
    assert not user.is_organizer
    assert not user.is_platform_admin


def test_superuser_is_platform_admin(django_user_model: type[GatepassUser]) -> None:
    user = django_user_model.objects.create_superuser(username="root@b.test", email="root@b.test", password="pw")

    assert user.role == Role.ADMIN
    assert user.is_platform_admin
