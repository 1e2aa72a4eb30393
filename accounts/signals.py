"""Signály, které udržují profily v souladu s uživateli."""
import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from allauth.socialaccount.signals import social_account_added, social_account_updated
from allauth.account.signals import user_signed_up

from .models import Profile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_profile(sender, instance, created, **kwargs):
    """Každý nový uživatel dostane prázdný profil."""
    if created:
        Profile.objects.get_or_create(user=instance)


def _copy_provider_picture(user, sociallogin):
    picture = sociallogin.account.get_avatar_url() if sociallogin else None
    if not picture:
        return
    profile, _ = Profile.objects.get_or_create(user=user)
    if profile.image_url != picture:
        profile.image_url = picture
        profile.save(update_fields=["image_url"])


@receiver(user_signed_up)
def fill_profile_on_signup(request, user, sociallogin=None, **kwargs):
    """Předvyplní jméno a obrázek z údajů OAuth poskytovatele."""
    profile, _ = Profile.objects.get_or_create(user=user)
    if sociallogin and not profile.display_name:
        extra = sociallogin.account.extra_data or {}
        profile.display_name = (extra.get("name") or "")[:50]
        profile.save(update_fields=["display_name"])
    _copy_provider_picture(user, sociallogin)
    logger.info("New user signed up: %s", user.pk)


@receiver(social_account_added)
@receiver(social_account_updated)
def refresh_provider_picture(request, sociallogin, **kwargs):
    """Aktualizuje obrázek od poskytovatele při propojení nebo obnovení účtu."""
    _copy_provider_picture(sociallogin.user, sociallogin)
