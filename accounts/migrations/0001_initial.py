from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


def create_missing_profiles(apps, schema_editor):
    User = apps.get_model(*settings.AUTH_USER_MODEL.split("."))
    Profile = apps.get_model("accounts", "Profile")
    for user in User.objects.filter(profile__isnull=True):
        Profile.objects.create(user=user)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("display_name", models.CharField(blank=True, max_length=50)),
                ("bio", models.TextField(blank=True, max_length=500)),
                ("avatar", models.ImageField(blank=True, null=True, upload_to="avatars/")),
                ("image_url", models.URLField(blank=True, help_text="Picture from the OAuth provider")),
                ("total_score", models.PositiveIntegerField(db_index=True, default=0)),
                ("quizzes_taken", models.PositiveIntegerField(default=0)),
                ("quizzes_created", models.PositiveIntegerField(db_index=True, default=0)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-total_score"],
            },
        ),
        migrations.RunPython(create_missing_profiles, migrations.RunPython.noop),
    ]
