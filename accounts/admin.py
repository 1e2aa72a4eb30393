"""
Registrace profilů do Django adminu.
"""
from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "display_name", "total_score", "quizzes_taken", "quizzes_created")
    search_fields = ("user__username", "user__email", "display_name")
