"""
Accounts app models.

Defines the ``Staff`` model: the single identity type of the tracker.
Staff log in with email + password; ``is_admin`` is the only role flag and
``is_approved`` gates whether a registered account may log in at all.
"""

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class StaffManager(BaseUserManager):
    """
    Manager for an email-keyed user model without ``username``.
    """

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("Staff must have an email address.")
        email = self.normalize_email(email)
        staff = self.model(email=email, **extra_fields)
        staff.set_password(password)
        staff.save(using=self._db)
        return staff

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("is_admin", False)
        extra_fields.setdefault("is_approved", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        """Django-admin superuser; also an approved tracker admin."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_admin", True)
        extra_fields.setdefault("is_approved", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")
        return self._create_user(email, password, **extra_fields)


class Staff(AbstractUser):
    """
    A member of the forensic unit.

    Registration creates an *unapproved* account; an admin approves it
    before the first login succeeds.  The very first admin is created
    through the secret-gated bootstrap endpoint and is approved on
    creation.

    ``is_staff`` / ``is_superuser`` are Django-admin flags only and play no
    part in the API's authorization, which looks at ``is_admin``.
    """

    username = None
    first_name = None
    last_name = None

    name = models.CharField(
        max_length=150,
        verbose_name="Full Name",
    )
    email = models.EmailField(
        unique=True,
        verbose_name="Email Address",
    )
    is_admin = models.BooleanField(
        default=False,
        verbose_name="Admin",
        help_text="Admins approve staff and perform privileged case/evidence edits.",
    )
    is_approved = models.BooleanField(
        default=False,
        verbose_name="Approved",
        help_text="Unapproved staff cannot log in.",
    )
    profile_picture = models.URLField(
        max_length=500,
        blank=True,
        null=True,
        verbose_name="Profile Picture",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    objects = StaffManager()

    class Meta:
        verbose_name = "Staff"
        verbose_name_plural = "Staff"
        ordering = ["name", "id"]

    def __str__(self):
        role = "admin" if self.is_admin else "staff"
        return f"{self.name} <{self.email}> ({role})"

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name.split(" ")[0] if self.name else self.email
