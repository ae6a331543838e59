import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Case",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("case_id", models.CharField(help_text="Human-assigned identifier, unique across all cases.", max_length=100, unique=True, verbose_name="Case ID")),
                ("status", models.CharField(choices=[("Open", "Open"), ("In Progress", "In Progress"), ("Closed", "Closed")], db_index=True, default="Open", max_length=20, verbose_name="Status")),
                ("date", models.DateTimeField(default=django.utils.timezone.now, verbose_name="Date Opened")),
                ("location", models.CharField(max_length=500, verbose_name="Location")),
                ("staff", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="cases", to=settings.AUTH_USER_MODEL, verbose_name="Assigned Staff")),
            ],
            options={
                "verbose_name": "Case",
                "verbose_name_plural": "Cases",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="CaseRemark",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("text", models.TextField(verbose_name="Text")),
                ("timestamp", models.DateTimeField(auto_now_add=True, verbose_name="Timestamp")),
                ("staff", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Written By")),
                ("case", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="remarks", to="cases.case", verbose_name="Case")),
            ],
            options={
                "verbose_name": "Case Remark",
                "verbose_name_plural": "Case Remarks",
                "ordering": ["timestamp", "id"],
                "abstract": False,
            },
        ),
    ]
