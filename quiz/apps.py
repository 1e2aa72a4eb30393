"""
Konfigurace aplikace ``quiz``.

Aplikace obsahuje modely kvízů, vyhodnocení odpovědí, API kvízů a stránky
kvízů.
"""
from django.apps import AppConfig


class QuizConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "quiz"
