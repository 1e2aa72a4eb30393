"""Pomocné funkce pro vytváření testovacích dat."""
import json

from django.conf import settings
from django.contrib.auth.models import User

from quiz.models import Category, Question, Quiz


def make_user(username="player", email=None, **kwargs):
    return User.objects.create_user(
        username=username, email=email or f"{username}@example.com", password="secret-pass", **kwargs
    )


def make_category(slug="science", name="Science"):
    return Category.objects.get_or_create(slug=slug, defaults={"name": name})[0]


def make_quiz(author, title="Planets", status=Quiz.Status.PUBLISHED, is_public=True, questions=None, **kwargs):
    """
    Vytvoří kvíz s otázkami.

    ``questions`` je seznam dvojic ``(options, correct_indices)``; výchozí
    jsou dvě otázky s jednou správnou odpovědí po 10 bodech.
    """
    quiz = Quiz.objects.create(
        author=author,
        title=title,
        status=status,
        is_public=is_public,
        category=kwargs.pop("category", None) or make_category(),
        **kwargs,
    )
    if questions is None:
        questions = [(["Mars", "Venus", "Jupiter"], [2]), (["1", "2", "8"], [2])]
    for order, (options, correct) in enumerate(questions):
        Question.objects.create(
            quiz=quiz,
            content=f"Question {order + 1}",
            options=options,
            correct_indices=correct,
            is_multiple_choice=len(correct) > 1,
            explanation=f"Explanation {order + 1}",
            order=order,
        )
    return quiz


def sign_in(client, user):
    """Přihlásí ``user`` a nastaví cookie, kterou hledá strážce cest."""
    client.force_login(user)
    client.cookies[settings.SESSION_HINT_COOKIE_NAME] = "1"


def post_json(client, url, data, method="post"):
    return getattr(client, method)(url, data=json.dumps(data), content_type="application/json")
