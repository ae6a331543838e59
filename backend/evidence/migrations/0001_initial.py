import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("cases", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Evidence",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("item", models.CharField(max_length=255, verbose_name="Item")),
                ("description", models.TextField(verbose_name="Description")),
                ("location", models.CharField(max_length=500, verbose_name="Location Found")),
                ("photo", models.URLField(blank=True, max_length=500, null=True, verbose_name="Photo URL")),
                ("case", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="evidence", to="cases.case", verbose_name="Case")),
                ("uploaded_by", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="uploaded_evidence", to=settings.AUTH_USER_MODEL, verbose_name="Uploaded By")),
            ],
            options={
                "verbose_name": "Evidence",
                "verbose_name_plural": "Evidence",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="EvidenceRemark",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("text", models.TextField(verbose_name="Text")),
                ("timestamp", models.DateTimeField(auto_now_add=True, verbose_name="Timestamp")),
                ("staff", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Written By")),
                ("evidence", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="remarks", to="evidence.evidence", verbose_name="Evidence")),
            ],
            options={
                "verbose_name": "Evidence Remark",
                "verbose_name_plural": "Evidence Remarks",
                "ordering": ["timestamp", "id"],
                "abstract": False,
            },
        ),
    ]
