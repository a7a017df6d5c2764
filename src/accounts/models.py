import re
import typing as t
import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class Role(models.TextChoices):
    STUDENT = "student", "Student"
    ORGANIZER = "organizer", "Organizer"
    ADMIN = "admin", "Admin"


class GatepassUserManager(UserManager["GatepassUser"]):
    def create_superuser(
        self, username: str, email: str | None = None, password: str | None = None, **extra_fields: t.Any
    ) -> "GatepassUser":
        """Superusers are platform admins."""
        extra_fields.setdefault("role", Role.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class GatepassUser(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255, blank=True, help_text="Full name")
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.STUDENT, db_index=True)

    objects = GatepassUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    @property
    def display_name(self) -> str:
        """Display name."""
        return self.get_display_name()

    def get_display_name(self) -> str:
        """Returns the user's name, or their full name as a fallback."""
        return self.name or self.get_full_name() or re.sub(r"(\W|_)+", " ", self.username.split("@")[0]).title()

    @property
    def is_organizer(self) -> bool:
        return self.role == Role.ORGANIZER

    @property
    def is_platform_admin(self) -> bool:
        return self.role == Role.ADMIN
