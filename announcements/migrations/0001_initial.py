import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Announcement",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("text", models.TextField(help_text="Announcement body as typed (plain text).")),
                ("images", models.JSONField(blank=True, help_text="Ordered list of hosted image URLs.", null=True)),
                ("date", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-date", "-id"],
                "indexes": [models.Index(fields=["-date", "-id"], name="announcement_feed_idx")],
            },
        ),
    ]
