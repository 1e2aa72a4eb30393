"""
Modely uživatelských profilů.

Každý ``auth.User`` má právě jeden Profile s veřejnými údaji a čítači,
které se zobrazují v žebříčcích.
"""
from django.conf import settings
from django.db import models


class Profile(models.Model):
    """
    Veřejný profil a statistiky uživatele.

    Čítače jsou denormalizované, aby podle nich žebříčky mohly přímo řadit:
    - total_score: součet bodů ze všech odeslaných her,
    - quizzes_taken: počet odeslaných her,
    - quizzes_created: počet zveřejněných kvízů.
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    display_name = models.CharField(max_length=50, blank=True)
    bio = models.TextField(max_length=500, blank=True)
    avatar = models.ImageField(upload_to="avatars/", null=True, blank=True)
    image_url = models.URLField(blank=True, help_text="Picture from the OAuth provider")
    total_score = models.PositiveIntegerField(default=0, db_index=True)
    quizzes_taken = models.PositiveIntegerField(default=0)
    quizzes_created = models.PositiveIntegerField(default=0, db_index=True)

    class Meta:
        ordering = ["-total_score"]

    def __str__(self):
        return self.name

    @property
    def name(self):
        """Zobrazované jméno, jinak celé jméno účtu nebo uživatelské jméno."""
        return self.display_name or self.user.get_full_name() or self.user.username

    @property
    def picture(self):
        """Nahraný avatar, jinak obrázek od poskytovatele přihlášení."""
        if self.avatar:
            return self.avatar.url
        return self.image_url or None
