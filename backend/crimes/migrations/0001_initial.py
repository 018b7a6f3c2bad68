import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Crime",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("crime_type", models.CharField(db_index=True, help_text="Free-text category, e.g. 'Theft' or 'Fraud'.", max_length=100, verbose_name="Crime Type")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("date_occurred", models.DateTimeField(verbose_name="Date Occurred")),
                ("status", models.CharField(choices=[("reported", "Reported"), ("accepted", "Accepted"), ("rejected", "Rejected"), ("investigation", "Investigation"), ("pending", "Pending"), ("closed", "Closed")], db_index=True, default="reported", max_length=20, verbose_name="Status")),
                ("reported_by", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="reported_crimes", to=settings.AUTH_USER_MODEL, verbose_name="Reported By")),
                ("administrative", models.ForeignKey(blank=True, limit_choices_to={"role": "administrative"}, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="assigned_crimes", to=settings.AUTH_USER_MODEL, verbose_name="Assigned Administrative")),
                ("accused", models.ManyToManyField(blank=True, related_name="crimes_accused", to=settings.AUTH_USER_MODEL, verbose_name="Accused")),
                ("victims", models.ManyToManyField(blank=True, related_name="crimes_victimized", to=settings.AUTH_USER_MODEL, verbose_name="Victims")),
            ],
            options={
                "verbose_name": "Crime",
                "verbose_name_plural": "Crimes",
                "ordering": ["-date_occurred", "-id"],
                "indexes": [models.Index(fields=["status", "crime_type"], name="crime_status_type_idx")],
            },
        ),
        migrations.CreateModel(
            name="Location",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("city", models.CharField(max_length=120, verbose_name="City")),
                ("state", models.CharField(max_length=120, verbose_name="State")),
                ("country", models.CharField(max_length=120, verbose_name="Country")),
                ("crime", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="location", to="crimes.crime", verbose_name="Crime")),
            ],
            options={
                "verbose_name": "Location",
                "verbose_name_plural": "Locations",
            },
        ),
        migrations.CreateModel(
            name="CrimeLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("message", models.TextField(verbose_name="Message")),
                ("author", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="crime_log_entries", to=settings.AUTH_USER_MODEL, verbose_name="Author")),
                ("crime", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="logs", to="crimes.crime", verbose_name="Crime")),
            ],
            options={
                "verbose_name": "Crime Log",
                "verbose_name_plural": "Crime Logs",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
