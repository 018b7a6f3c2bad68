import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("crimes", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Evidence",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("image", models.BinaryField(blank=True, null=True, verbose_name="Image")),
                ("mime", models.CharField(default="image/jpeg", max_length=100, verbose_name="MIME Type")),
                ("filename", models.CharField(default="evidence.jpg", max_length=255, verbose_name="Filename")),
                ("crime", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="evidence", to="crimes.crime", verbose_name="Crime")),
                ("submitted_by", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="submitted_evidence", to=settings.AUTH_USER_MODEL, verbose_name="Submitted By")),
            ],
            options={
                "verbose_name": "Evidence",
                "verbose_name_plural": "Evidence",
                "ordering": ["created_at", "id"],
            },
        ),
    ]
