from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AdminConfig",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(help_text='Lookup key, e.g. "admin".', max_length=50, unique=True)),
                ("email", models.EmailField(help_text="Email of the identity that holds this role (exact match).", max_length=254)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "admin config",
                "verbose_name_plural": "admin config",
                "ordering": ["key"],
            },
        ),
    ]
