"""
Vytváření, nahrazování a mazání kvízů.

Sdílí je JSON API i stránky editoru. Vstup musí být předem vyčištěný přes
``quiz.forms.clean_quiz_payload``.
"""
import logging

from django.db import transaction
from django.db.models import F
from django.utils.text import slugify

from accounts.models import Profile
from core.exceptions import ValidationFailed

from .models import Question, Quiz, Tag

logger = logging.getLogger(__name__)


def _tags_for(names):
    tags = []
    for name in dict.fromkeys(names):
        slug = slugify(name, allow_unicode=True)[:50]
        if not slug:
            continue
        tag, _ = Tag.objects.get_or_create(slug=slug, defaults={"name": name[:50]})
        tags.append(tag)
    return tags


def _adjust_quizzes_created(user, delta):
    profiles = Profile.objects.filter(user=user)
    if delta < 0:
        profiles = profiles.filter(quizzes_created__gte=-delta)
    profiles.update(quizzes_created=F("quizzes_created") + delta)


def _question_fields(question):
    return (
        question.get("content") or "",
        list(question.get("options") or []),
        sorted(set(question.get("correct_indices") or [])),
        bool(question.get("is_multiple_choice", False)),
        question.get("explanation") or "",
        question.get("image_url") or "",
        question.get("points") or 10,
    )


def _stored_question_fields(question):
    return (
        question.content,
        list(question.options),
        sorted(set(question.correct_indices)),
        question.is_multiple_choice,
        question.explanation,
        question.image_url,
        question.points,
    )


def _questions_changed(quiz, questions):
    stored = [_stored_question_fields(question) for question in quiz.questions.all()]
    return stored != [_question_fields(question) for question in questions]


def save_quiz(author, quiz_data, questions, quiz=None):
    """
    Vytvoří kvíz, nebo nahradí obsah ``quiz``.

    Otázky se nahradí celé a očíslují podle pořadí v seznamu, pokud se liší
    od uložených. Jakmile má kvíz odehrané hry, otázky se už měnit nesmí
    (historie odpovědí na ně odkazuje); metadata lze upravovat dál.
    Čítač ``quizzes_created`` autora odpovídá počtu jeho zveřejněných kvízů.

    Args:
        author: vlastník kvízu
        quiz_data: vyčištěná pole kvízu
        questions: seznam vyčištěných otázek
        quiz: existující kvíz k přepsání, nebo None pro nový

    Returns:
        Uložený Quiz.

    Raises:
        ValidationFailed: otázky se změnily u kvízu, který už má výsledky.
    """
    with transaction.atomic():
        was_published = quiz is not None and quiz.is_published
        replace_questions = quiz is None or _questions_changed(quiz, questions)
        if replace_questions and quiz is not None and quiz.scores.exists():
            raise ValidationFailed(details={"questions_locked": [{
                "message": "Questions cannot be changed once the quiz has been played.",
                "code": "played",
            }]})
        if quiz is None:
            quiz = Quiz(author=author)
        quiz.title = quiz_data["title"]
        quiz.description = quiz_data.get("description") or ""
        quiz.category = quiz_data.get("category_id")
        quiz.is_public = quiz_data.get("is_public", True)
        quiz.time_limit = quiz_data.get("time_limit")
        quiz.passing_score = quiz_data.get("passing_score", 60)
        quiz.status = quiz_data["status"]
        quiz.save()

        quiz.tags.set(_tags_for(quiz_data.get("tags") or []))

        if replace_questions:
            quiz.questions.all().delete()
            Question.objects.bulk_create([
                Question(
                    quiz=quiz,
                    content=question.get("content") or "",
                    options=question.get("options") or [],
                    correct_indices=sorted(set(question.get("correct_indices") or [])),
                    is_multiple_choice=question.get("is_multiple_choice", False),
                    explanation=question.get("explanation") or "",
                    image_url=question.get("image_url") or "",
                    points=question.get("points") or 10,
                    order=order,
                )
                for order, question in enumerate(questions)
            ])

        if quiz.is_published and not was_published:
            _adjust_quizzes_created(author, 1)
        elif was_published and not quiz.is_published:
            _adjust_quizzes_created(author, -1)

    logger.info("Saved quiz %s (%s) with %d questions", quiz.pk, quiz.status, len(questions))
    return quiz


def delete_quiz(quiz):
    quiz_id = quiz.pk
    with transaction.atomic():
        if quiz.is_published:
            _adjust_quizzes_created(quiz.author, -1)
        quiz.delete()
    logger.info("Deleted quiz %s", quiz_id)
