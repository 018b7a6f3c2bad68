"""
Accounts app models.

Defines the identity store: a custom ``User`` model keyed by email with a
fixed role tag, plus the per-role profile records (``AdminProfile`` and
``AdministrativeProfile``).  A user owns at most one profile, matching
its role.
"""

from django.contrib.auth.base_user import BaseUserManager
from django.contrib.auth.models import AbstractUser
from django.db import models

from core.models import TimeStampedModel


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class UserRole(models.TextChoices):
    """Role tag stored on every user."""

    CIVILIAN = "civilian", "Civilian"
    ADMIN = "admin", "Admin"
    ADMINISTRATIVE = "administrative", "Administrative"


class Designation(models.TextChoices):
    """Rank of an administrative (police) user."""

    OFFICER = "officer", "Officer"
    DETECTIVE = "detective", "Detective"
    SERGEANT = "sergeant", "Sergeant"
    LIEUTENANT = "lieutenant", "Lieutenant"
    CAPTAIN = "captain", "Captain"
    MAJOR = "major", "Major"
    DEPUTY_CHIEF = "deputy_chief", "Deputy Chief"
    CHIEF = "chief", "Chief"
    COMMISSIONER = "commissioner", "Commissioner"
    SHERIFF = "sheriff", "Sheriff"


class Department(models.TextChoices):
    """Department an administrative user belongs to."""

    HOMICIDE = "homicide", "Homicide"
    NARCOTICS = "narcotics", "Narcotics"
    CYBER_CRIME = "cyber_crime", "Cyber Crime"
    TRAFFIC = "traffic", "Traffic"
    FORENSICS = "forensics", "Forensics"
    INTERNAL_AFFAIRS = "internal_affairs", "Internal Affairs"
    K9_UNIT = "k9_unit", "K9 Unit"
    SWAT = "swat", "SWAT"
    VICE = "vice", "Vice"
    PATROL = "patrol", "Patrol"
    INTELLIGENCE = "intelligence", "Intelligence"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class UserManager(BaseUserManager):
    """Manager for the email-keyed ``User`` model."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("An email address is required.")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", UserRole.CIVILIAN)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", UserRole.ADMIN)
        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    Custom user model for the crime-management system.

    Users sign in with their **email**, password, and the role they
    claim; the role must match the stored ``role`` tag.  New sign-ups are
    always civilians.  Administrative (police) accounts are created by
    an Admin.
    """

    username = None
    email = models.EmailField(
        unique=True,
        verbose_name="Email Address",
    )
    phone_number = models.CharField(
        max_length=20,
        blank=True,
        default="",
        verbose_name="Phone Number",
    )
    dob = models.DateField(
        null=True,
        blank=True,
        verbose_name="Date of Birth",
    )
    location = models.CharField(
        max_length=255,
        blank=True,
        default="",
        verbose_name="Location",
        help_text="Free-text home location (e.g. 'Springfield, IL, USA').",
    )
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CIVILIAN,
        db_index=True,
        verbose_name="Role",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["first_name", "last_name"]

    objects = UserManager()

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ["first_name", "last_name"]

    def __str__(self):
        return f"{self.email} ({self.name}) - {self.get_role_display()}"

    @property
    def name(self) -> str:
        """Display name used in tokens and crime log messages."""
        return self.get_full_name() or self.email

    # ── Helper predicates for role checks ────────────────────────────

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_administrative(self) -> bool:
        return self.role == UserRole.ADMINISTRATIVE


class AdminProfile(TimeStampedModel):
    """Profile record owned by an Admin user."""

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name="admin_profile",
        verbose_name="User",
    )

    class Meta:
        verbose_name = "Admin Profile"
        verbose_name_plural = "Admin Profiles"

    def __str__(self):
        return f"Admin {self.user.name}"


class AdministrativeProfile(TimeStampedModel):
    """
    Profile record owned by an Administrative (police) user.

    ``badge_number`` is assigned sequentially by the service layer when
    the officer account is created.
    """

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name="administrative_profile",
        verbose_name="User",
    )
    badge_number = models.PositiveIntegerField(
        unique=True,
        verbose_name="Badge Number",
    )
    designation = models.CharField(
        max_length=20,
        choices=Designation.choices,
        verbose_name="Designation",
    )
    department = models.CharField(
        max_length=20,
        choices=Department.choices,
        verbose_name="Department",
    )

    class Meta:
        verbose_name = "Administrative Profile"
        verbose_name_plural = "Administrative Profiles"
        ordering = ["badge_number"]

    def __str__(self):
        return f"#{self.badge_number} {self.get_designation_display()} {self.user.name}"
