"""
Management command pro vytvoření výchozích kategorií kvízů.

Použití:
    python manage.py seed_categories

Existující kategorie (podle slugu) se aktualizují na místě, takže příkaz
lze spouštět opakovaně.
"""
from django.core.management.base import BaseCommand

from quiz.models import Category

DEFAULT_CATEGORIES = [
    ("general", "General Knowledge", "Everyday trivia and mixed topics", "💡"),
    ("science", "Science", "Physics, chemistry, biology and more", "🔬"),
    ("history", "History", "Events and people from the past", "📜"),
    ("geography", "Geography", "Countries, capitals and landscapes", "🌍"),
    ("entertainment", "Entertainment", "Movies, music, games and pop culture", "🎬"),
    ("sports", "Sports", "Athletes, teams and competitions", "⚽"),
    ("technology", "Technology", "Computers, software and the internet", "💻"),
    ("business", "Business", "Economics, finance and management", "💼"),
    ("language", "Language", "Vocabulary, grammar and languages of the world", "🗣"),
    ("certification", "Certification", "Practice for exams and certificates", "🎓"),
]


class Command(BaseCommand):
    help = "Vytvoří nebo aktualizuje výchozí kategorie kvízů"

    def handle(self, *args, **options):
        created_count = 0
        for order, (slug, name, description, icon) in enumerate(DEFAULT_CATEGORIES):
            _, created = Category.objects.update_or_create(
                slug=slug,
                defaults={"name": name, "description": description, "icon": icon, "order": order},
            )
            created_count += created
        self.stdout.write(
            self.style.SUCCESS(
                f"Vytvořeno kategorií: {created_count}, aktualizováno: {len(DEFAULT_CATEGORIES) - created_count}."
            )
        )
