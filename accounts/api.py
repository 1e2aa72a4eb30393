"""JSON API pro uživatelské profily."""
from django.contrib.auth import get_user_model
from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from core.api import api_view, isoformat, require_user
from quiz.models import Quiz

from .models import Profile


def _profile_payload(user, include_email=False):
    profile, _ = Profile.objects.get_or_create(user=user)
    data = {
        "id": user.pk,
        "name": profile.name,
        "display_name": profile.display_name or None,
        "image": profile.picture,
        "bio": profile.bio or None,
        "total_score": profile.total_score,
        "quizzes_taken": profile.quizzes_taken,
        "quizzes_created": profile.quizzes_created,
        "created_at": isoformat(user.date_joined),
    }
    if include_email:
        data["email"] = user.email
    return data


@api_view(["GET"])
def me(request):
    """Profil volajícího s jeho posledními kvízy a hrami."""
    user = require_user(request)
    recent_quizzes = Quiz.objects.filter(author=user).select_related("category")[:5]
    recent_scores = user.scores.select_related("quiz")[:5]
    return JsonResponse({
        "user": _profile_payload(user, include_email=True),
        "recent_quizzes": [
            {
                "id": q.pk,
                "title": q.title,
                "status": q.status,
                "category": q.category.name if q.category else None,
                "question_count": q.questions.count(),
                "play_count": q.play_count,
                "created_at": isoformat(q.created_at),
            }
            for q in recent_quizzes
        ],
        "recent_scores": [
            {
                "id": s.pk,
                "quiz": {"id": s.quiz_id, "title": s.quiz.title},
                "score": s.score,
                "max_score": s.max_score,
                "percentage": s.percentage,
                "created_at": isoformat(s.created_at),
            }
            for s in recent_scores
        ],
    })


@api_view(["GET"])
def user_detail(request, user_id):
    """Veřejný profil s posledními zveřejněnými kvízy uživatele."""
    user = get_object_or_404(get_user_model(), pk=user_id, is_active=True)
    recent_quizzes = Quiz.objects.listed().filter(author=user).select_related("category")[:6]
    return JsonResponse({
        "user": _profile_payload(user),
        "recent_quizzes": [
            {
                "id": q.pk,
                "title": q.title,
                "description": q.description,
                "category": {"id": q.category.pk, "name": q.category.name, "slug": q.category.slug} if q.category else None,
                "question_count": q.questions.count(),
                "play_count": q.play_count,
                "avg_score": q.avg_score,
                "time_limit": q.time_limit,
                "created_at": isoformat(q.created_at),
            }
            for q in recent_quizzes
        ],
    })
