"""
Management command: seed_demo_data
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Fills the database with fake but realistic demo data: Admin,
Administrative (with badge numbers, designations and departments) and
Civilian users, and crimes with a location, an assignee, accused and
victim users, one evidence item and an initial crime log.

The command first wipes the previous demo data (every user whose email
ends with ``@demo.local`` and every crime they reported), so it can be
re-run at will.  Superusers, other real accounts and the crimes they
reported are left alone.

Usage::

    python manage.py seed_demo_data
    python manage.py seed_demo_data --crimes 100 --seed 42
"""

import base64
import random

from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import Max
from django.utils import timezone
from faker import Faker

from accounts.models import (
    AdministrativeProfile,
    AdminProfile,
    Department,
    Designation,
    User,
    UserRole,
)
from core.constants import FIRST_BADGE_NUMBER
from crimes.models import Crime, CrimeLog, CrimeStatus, Location
from evidence.models import Evidence

DEMO_EMAIL_DOMAIN = "demo.local"
DEMO_PASSWORD = "DemoPass123!"

CRIME_TYPES = ["Theft", "Assault", "Cybercrime", "Drug Trafficking", "Fraud"]

# 1×1 transparent PNG used as the demo evidence image.
_DEMO_IMAGE = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class Command(BaseCommand):
    help = (
        "Wipes previous demo data and seeds Admin, Administrative and "
        "Civilian users plus crimes with locations, people, evidence and logs."
    )

    def add_arguments(self, parser):
        parser.add_argument("--admins", type=int, default=2)
        parser.add_argument("--administratives", type=int, default=8)
        parser.add_argument("--civilians", type=int, default=20)
        parser.add_argument("--crimes", type=int, default=40)
        parser.add_argument("--password", default=DEMO_PASSWORD,
                            help="Password shared by every demo account.")
        parser.add_argument("--seed", type=int, default=None,
                            help="Seed for Faker and random, for reproducible data.")

    def handle(self, *args, **options):
        self.fake = Faker()
        if options["seed"] is not None:
            Faker.seed(options["seed"])
            random.seed(options["seed"])
        self.password = options["password"]
        self._email_counter = 0

        self.stdout.write(self.style.MIGRATE_HEADING(
            "\n══════════════════════════════════════════"
            "\n  Demo Data — Seeding Users & Crimes"
            "\n══════════════════════════════════════════\n"
        ))

        with transaction.atomic():
            self._wipe()
            admins = [self._create_admin() for _ in range(options["admins"])]
            first_badge = self._next_badge_number()
            administratives = [
                self._create_administrative(first_badge + i)
                for i in range(options["administratives"])
            ]
            civilians = [self._create_civilian() for _ in range(options["civilians"])]
            everyone = admins + administratives + civilians

            self.stdout.write(self.style.SUCCESS(
                f"  ✔  Users: {len(admins)} admin(s), "
                f"{len(administratives)} administrative(s), "
                f"{len(civilians)} civilian(s)"
            ))

            crimes = 0
            if everyone:
                for _ in range(options["crimes"]):
                    self._create_crime(everyone, administratives, civilians or everyone)
                    crimes += 1

        # ── Summary ─────────────────────────────────────────────────
        self.stdout.write(self.style.MIGRATE_HEADING(
            "\n──────────────────────────────────────────"
        ))
        self.stdout.write(self.style.SUCCESS(
            f"  Done!  {crimes} crime(s) created.  "
            f"Sign in with any @{DEMO_EMAIL_DOMAIN} email and password "
            f"'{self.password}'.\n"
        ))

    # ── Wipe ─────────────────────────────────────────────────────────

    def _wipe(self):
        demo_users = User.objects.filter(
            email__endswith=f"@{DEMO_EMAIL_DOMAIN}",
            is_superuser=False,
        )
        # Crime logs, locations and evidence cascade with their crime.
        crimes_deleted, _ = Crime.objects.filter(reported_by__in=demo_users).delete()
        users_deleted, _ = demo_users.delete()
        self.stdout.write(self.style.WARNING(
            f"  ⚠  Removed previous demo data ({crimes_deleted} crime row(s), "
            f"{users_deleted} user row(s) incl. related)."
        ))

    # ── Users ────────────────────────────────────────────────────────

    def _create_user(self, role: str) -> User:
        first_name = self.fake.first_name()
        last_name = self.fake.last_name()
        self._email_counter += 1
        email = (
            f"{first_name}.{last_name}.{self._email_counter}@{DEMO_EMAIL_DOMAIN}"
            .lower()
            .replace(" ", "")
            .replace("'", "")
        )
        return User.objects.create_user(
            email=email,
            password=self.password,
            first_name=first_name,
            last_name=last_name,
            phone_number=self.fake.numerify("+1 ###-###-####"),
            dob=self.fake.date_of_birth(minimum_age=18, maximum_age=70),
            location=self.fake.city(),
            role=role,
        )

    def _next_badge_number(self) -> int:
        current = AdministrativeProfile.objects.aggregate(max_badge=Max("badge_number"))["max_badge"]
        return FIRST_BADGE_NUMBER if current is None else current + 1

    def _create_admin(self) -> User:
        user = self._create_user(UserRole.ADMIN)
        AdminProfile.objects.create(user=user)
        return user

    def _create_administrative(self, badge_number: int) -> User:
        user = self._create_user(UserRole.ADMINISTRATIVE)
        AdministrativeProfile.objects.create(
            user=user,
            badge_number=badge_number,
            designation=random.choice(Designation.values),
            department=random.choice(Department.values),
        )
        return user

    def _create_civilian(self) -> User:
        return self._create_user(UserRole.CIVILIAN)

    # ── Crimes ───────────────────────────────────────────────────────

    def _create_crime(self, everyone, administratives, civilians) -> Crime:
        reporter = random.choice(civilians)
        crime = Crime.objects.create(
            title=self.fake.sentence(nb_words=6).rstrip(".").ljust(10, "."),
            crime_type=random.choice(CRIME_TYPES),
            description=self.fake.paragraph(),
            date_occurred=self.fake.date_time_between(
                start_date="-5y",
                end_date="now",
                tzinfo=timezone.get_current_timezone(),
            ),
            status=random.choice(CrimeStatus.values),
            reported_by=reporter,
            administrative=random.choice(administratives) if administratives else None,
        )
        Location.objects.create(
            crime=crime,
            city=self.fake.city(),
            state=self.fake.state(),
            country=self.fake.country(),
        )
        crime.accused.add(random.choice(everyone))
        crime.victims.add(random.choice(everyone))

        Evidence.objects.create(
            crime=crime,
            title=self.fake.word().capitalize(),
            description=self.fake.sentence(),
            image=_DEMO_IMAGE,
            mime="image/png",
            filename="evidence.png",
            submitted_by=reporter,
        )

        CrimeLog.objects.create(crime=crime, author=reporter, message=f"Crime reported by {reporter.name}.")
        if crime.administrative is not None and crime.status != CrimeStatus.REPORTED:
            CrimeLog.objects.create(
                crime=crime,
                author=crime.administrative,
                message=f"Status set to {crime.get_status_display()} by {crime.administrative.name}.",
            )
        return crime
