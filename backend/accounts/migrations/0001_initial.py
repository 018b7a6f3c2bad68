import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import accounts.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("is_staff", models.BooleanField(default=False, help_text="Designates whether the user can log into this admin site.", verbose_name="staff status")),
                ("is_active", models.BooleanField(default=True, help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.", verbose_name="active")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("email", models.EmailField(max_length=254, unique=True, verbose_name="Email Address")),
                ("phone_number", models.CharField(blank=True, default="", max_length=20, verbose_name="Phone Number")),
                ("dob", models.DateField(blank=True, null=True, verbose_name="Date of Birth")),
                ("location", models.CharField(blank=True, default="", help_text="Free-text home location (e.g. 'Springfield, IL, USA').", max_length=255, verbose_name="Location")),
                ("role", models.CharField(choices=[("civilian", "Civilian"), ("admin", "Admin"), ("administrative", "Administrative")], db_index=True, default="civilian", max_length=20, verbose_name="Role")),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
            ],
            options={
                "verbose_name": "User",
                "verbose_name_plural": "Users",
                "ordering": ["first_name", "last_name"],
            },
            managers=[
                ("objects", accounts.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="AdminProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="admin_profile", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Admin Profile",
                "verbose_name_plural": "Admin Profiles",
            },
        ),
        migrations.CreateModel(
            name="AdministrativeProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("badge_number", models.PositiveIntegerField(unique=True, verbose_name="Badge Number")),
                ("designation", models.CharField(choices=[("officer", "Officer"), ("detective", "Detective"), ("sergeant", "Sergeant"), ("lieutenant", "Lieutenant"), ("captain", "Captain"), ("major", "Major"), ("deputy_chief", "Deputy Chief"), ("chief", "Chief"), ("commissioner", "Commissioner"), ("sheriff", "Sheriff")], max_length=20, verbose_name="Designation")),
                ("department", models.CharField(choices=[("homicide", "Homicide"), ("narcotics", "Narcotics"), ("cyber_crime", "Cyber Crime"), ("traffic", "Traffic"), ("forensics", "Forensics"), ("internal_affairs", "Internal Affairs"), ("k9_unit", "K9 Unit"), ("swat", "SWAT"), ("vice", "Vice"), ("patrol", "Patrol"), ("intelligence", "Intelligence")], max_length=20, verbose_name="Department")),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="administrative_profile", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Administrative Profile",
                "verbose_name_plural": "Administrative Profiles",
                "ordering": ["badge_number"],
            },
        ),
    ]
