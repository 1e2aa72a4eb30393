"""
Stránky profilů.

 - vlastní profil a veřejné profily ostatních uživatelů,
 - nastavení pro úpravu jména, popisu a avataru.
"""
import logging

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.contrib.auth.decorators import login_required
from django.shortcuts import get_object_or_404, redirect, render

from quiz.models import Quiz

from .forms import ProfileForm
from .models import Profile

logger = logging.getLogger(__name__)


@login_required
def profile(request):
    """Vlastní profil přihlášeného uživatele včetně konceptů."""
    profile, _ = Profile.objects.get_or_create(user=request.user)
    return render(request, "accounts/profile.html", {
        "profile_user": request.user,
        "profile": profile,
        "quizzes": Quiz.objects.filter(author=request.user).select_related("category"),
        "scores": request.user.scores.select_related("quiz")[:10],
        "is_own": True,
    })


def public_profile(request, user_id):
    """Veřejný profil jiného uživatele s jeho zveřejněnými kvízy."""
    profile_user = get_object_or_404(get_user_model(), pk=user_id, is_active=True)
    if profile_user == request.user:
        return redirect("profile")
    profile, _ = Profile.objects.get_or_create(user=profile_user)
    return render(request, "accounts/profile.html", {
        "profile_user": profile_user,
        "profile": profile,
        "quizzes": Quiz.objects.listed().filter(author=profile_user).select_related("category"),
        "scores": [],
        "is_own": False,
    })


@login_required
def settings_view(request):
    """
    Úprava profilu.

    GET: formulář předvyplněný aktuálním profilem
    POST: validace a uložení, včetně případného nahrání avataru
    """
    profile, _ = Profile.objects.get_or_create(user=request.user)
    if request.method == "POST":
        form = ProfileForm(request.POST, request.FILES, instance=profile)
        if form.is_valid():
            form.save()
            logger.info("Profile of user %s updated", request.user.pk)
            messages.success(request, "Your profile was saved.")
            return redirect("settings")
        messages.error(request, "Please fix the errors below.")
    else:
        form = ProfileForm(instance=profile)
    return render(request, "accounts/settings.html", {"form": form})
