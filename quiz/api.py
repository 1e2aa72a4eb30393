"""
JSON API pro kvízy.

Vše, s čím komunikuje stránka hraní a editor:
 - výpis, vytvoření, nahrazení a smazání kvízů,
 - otázky pro hraní a kontrola jednotlivých odpovědí,
 - odeslání výsledku a jeho zobrazení,
 - žebříčky, lajky, komentáře, kategorie a tagy.

Každé view je obalené ``api_view``, které potomky ``ApiError`` vrátí jako
JSON a neočekávané chyby schová za obecnou chybu 500.
"""
from datetime import timedelta

from django.db import transaction
from django.db.models import Count, F, Prefetch, Q, Sum
from django.db.models.functions import Coalesce
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone

from accounts.models import Profile
from accounts.roles import user_is_admin
from core.api import api_view, id_param, int_param, isoformat, paginate, parse_json, require_user
from core.exceptions import BadRequest, Forbidden, NotFound, ValidationFailed
from core.ratelimit import enforce_rate_limit

from .authoring import delete_quiz, save_quiz
from .forms import (
    CheckAnswerForm,
    CommentForm,
    CommentUpdateForm,
    LikeForm,
    SubmitScoreForm,
    clean_answers,
    clean_quiz_payload,
)
from .models import Category, Comment, Like, Question, Quiz, Score, Tag
from .scoring import check_answer as check_quiz_answer
from .scoring import record_submission, stored_results

SORT_ORDERS = {
    "popular": [F("play_count").desc()],
    "newest": [F("created_at").desc()],
    "score": [F("avg_score").desc(nulls_last=True)],
}

RANKING_PERIODS = {
    "all": None,
    "month": timedelta(days=30),
    "week": timedelta(days=7),
}


# ===== SERIALIZACE =====

def _user_summary(user):
    profile = getattr(user, "profile", None)
    return {
        "id": user.pk,
        "name": profile.name if profile else user.username,
        "image": profile.picture if profile else None,
    }


def _category_summary(category):
    if category is None:
        return None
    return {"id": category.pk, "name": category.name, "slug": category.slug}


def _quiz_summary(quiz):
    return {
        "id": quiz.pk,
        "title": quiz.title,
        "description": quiz.description,
        "author": _user_summary(quiz.author),
        "category": _category_summary(quiz.category),
        "status": quiz.status,
        "question_count": getattr(quiz, "question_count", None),
        "play_count": quiz.play_count,
        "avg_score": quiz.avg_score,
        "like_count": quiz.like_count,
        "time_limit": quiz.time_limit,
        "created_at": isoformat(quiz.created_at),
        "published_at": isoformat(quiz.published_at),
    }


def _quiz_detail(quiz):
    data = _quiz_summary(quiz)
    data.update({
        "tags": [{"id": t.pk, "name": t.name, "slug": t.slug} for t in quiz.tags.all()],
        "is_public": quiz.is_public,
        "passing_score": quiz.passing_score,
        "question_count": quiz.questions.count(),
        "updated_at": isoformat(quiz.updated_at),
    })
    return data


def _quiz_queryset():
    return (
        Quiz.objects
        .select_related("author__profile", "category")
        .annotate(question_count=Count("questions", distinct=True))
    )


def _visible_quiz_or_404(quiz_id, user):
    quiz = Quiz.objects.select_related("author__profile", "category").filter(pk=quiz_id).first()
    if quiz is None or not quiz.is_visible_to(user):
        raise NotFound("Quiz")
    return quiz


def _owned_quiz(request, quiz_id):
    user = require_user(request)
    quiz = get_object_or_404(Quiz, pk=quiz_id)
    if quiz.author_id != user.pk:
        raise Forbidden()
    return quiz


# ===== KVÍZY =====

@api_view(["GET", "POST"])
def quizzes(request):
    """
    GET: stránkovaný výpis kvízů.
        Query: page, limit (<= 50), category, q, sort (popular|newest|score),
        author, status (draft|published|all).
    POST: vytvoření kvízu (konceptu nebo zveřejněného) pro volajícího.
    """
    if request.method == "POST":
        return _create_quiz(request)

    enforce_rate_limit(request, "search")
    page = int_param(request, "page", 1)
    limit = int_param(request, "limit", 12, maximum=50)
    sort = request.GET.get("sort", "newest")
    if sort not in SORT_ORDERS:
        raise BadRequest("Invalid sort order")
    status = request.GET.get("status")
    author_id = id_param(request, "author", required=False)
    user = request.user

    queryset = _quiz_queryset()
    if status == Quiz.Status.DRAFT:
        queryset = queryset.filter(status=Quiz.Status.DRAFT, author_id=user.pk) if user.is_authenticated else queryset.none()
    elif status == "all" and user.is_authenticated and author_id == user.pk:
        queryset = queryset.filter(author_id=user.pk)
    else:
        queryset = queryset.listed()

    if category := request.GET.get("category"):
        lookup = {"category_id": int(category)} if category.isascii() and category.isdigit() else {"category__slug": category}
        queryset = queryset.filter(**lookup)
    if author_id:
        queryset = queryset.filter(author_id=author_id)
    if search := request.GET.get("q", "").strip():
        queryset = queryset.filter(Q(title__icontains=search) | Q(description__icontains=search))

    items, total, total_pages = paginate(queryset.order_by(*SORT_ORDERS[sort]), page, limit)
    return JsonResponse({
        "quizzes": [_quiz_summary(quiz) for quiz in items],
        "total": total,
        "total_pages": total_pages,
        "page": page,
    })


def _create_quiz(request):
    user = require_user(request)
    enforce_rate_limit(request, "create")
    quiz_data, questions = clean_quiz_payload(parse_json(request))
    quiz = save_quiz(user, quiz_data, questions)
    return JsonResponse(_quiz_detail(quiz), status=201)


@api_view(["GET", "PUT", "DELETE"])
def quiz_detail(request, quiz_id):
    """
    GET: metadata kvízu (404 pro kvízy, které volající nesmí vidět).
    PUT: nahrazení kvízu včetně otázek (jen vlastník). U odehraného kvízu
         se otázky smí poslat jen beze změny.
    DELETE: smazání kvízu (jen vlastník).
    """
    if request.method == "GET":
        return JsonResponse(_quiz_detail(_visible_quiz_or_404(quiz_id, request.user)))

    quiz = _owned_quiz(request, quiz_id)
    if request.method == "PUT":
        quiz_data, questions = clean_quiz_payload(parse_json(request))
        quiz = save_quiz(request.user, quiz_data, questions, quiz=quiz)
        return JsonResponse(_quiz_detail(quiz))

    delete_quiz(quiz)
    return JsonResponse({"success": True})


@api_view(["GET"])
def quiz_questions(request, quiz_id):
    """Otázky pro stránku hraní, bez správných odpovědí."""
    require_user(request)
    quiz = _visible_quiz_or_404(quiz_id, request.user)
    return JsonResponse({
        "quiz_id": quiz.pk,
        "title": quiz.title,
        "time_limit": quiz.time_limit,
        "questions": [
            {
                "id": q.pk,
                "content": q.content,
                "options": q.options,
                "image_url": q.image_url or None,
                "points": q.points,
                "order": q.order,
                "is_multiple_choice": q.is_multiple_choice,
            }
            for q in quiz.questions.all()
        ],
    })


@api_view(["POST"])
def check_answer(request, quiz_id):
    """
    Kontrola jedné odpovědi během hraní.

    Tělo: {"question_id": int, "selected_indices": [int, ...]}

    Vrací verdikt, správné indexy a vysvětlení. Otázka, která do kvízu
    nepatří, je 404, nikdy ne verdikt.
    """
    form = CheckAnswerForm(data=parse_json(request))
    if not form.is_valid():
        raise ValidationFailed.from_form(form)
    result = check_quiz_answer(
        quiz_id,
        form.cleaned_data["question_id"],
        form.cleaned_data["selected_indices"],
        user=request.user,
    )
    return JsonResponse(result.as_dict())


# ===== VÝSLEDKY =====

def _score_payload(score, results):
    return {
        "id": score.pk,
        "quiz": {"id": score.quiz_id, "title": score.quiz.title, "passing_score": score.quiz.passing_score},
        "score": score.score,
        "max_score": score.max_score,
        "percentage": score.percentage,
        "correct_count": score.correct_count,
        "total_count": score.total_count,
        "time_spent": score.time_spent,
        "passed": score.passed,
        "created_at": isoformat(score.created_at),
        "results": [result.as_dict() for result in results],
    }


@api_view(["POST"])
def scores(request):
    """
    Odeslání dokončené hry.

    Tělo: {"quiz_id": int, "answers": [{"question_id", "selected_indices",
    "time_spent"?}, ...], "total_time_spent"?: int}
    """
    user = require_user(request)
    enforce_rate_limit(request, "score")
    data = parse_json(request)
    form = SubmitScoreForm(data=data)
    if not form.is_valid():
        raise ValidationFailed.from_form(form)
    answers, times = clean_answers(data.get("answers", []))
    quiz = _visible_quiz_or_404(form.cleaned_data["quiz_id"], user)
    score, grade = record_submission(
        user, quiz, answers,
        time_spent=form.cleaned_data["total_time_spent"],
        answer_times=times,
    )
    return JsonResponse(_score_payload(score, grade.results), status=201)


@api_view(["GET"])
def score_detail(request, score_id):
    """Uložený výsledek s rozpisem po otázkách (jen pro hráče)."""
    user = require_user(request)
    score = get_object_or_404(Score.objects.select_related("quiz"), pk=score_id)
    if score.user_id != user.pk:
        raise Forbidden()
    return JsonResponse(_score_payload(score, stored_results(score)))


# ===== ŽEBŘÍČKY =====

@api_view(["GET"])
def rankings(request):
    """
    Žebříčky.

    Query: type (users|quizzes|creators), period (all|month|week), limit (<= 100).
    """
    kind = request.GET.get("type", "users")
    period = request.GET.get("period", "all")
    if period not in RANKING_PERIODS:
        raise BadRequest("Invalid ranking period")
    limit = int_param(request, "limit", 10, maximum=100)
    since = timezone.now() - RANKING_PERIODS[period] if RANKING_PERIODS[period] else None

    if kind == "users":
        profiles = Profile.objects.select_related("user").order_by("-total_score", "user_id")
        if since:
            profiles = profiles.filter(user__scores__created_at__gte=since).distinct()
        rows = [
            {"rank": rank, "user": {
                "id": p.user_id,
                "name": p.name,
                "image": p.picture,
                "total_score": p.total_score,
                "quizzes_taken": p.quizzes_taken,
                "quizzes_created": p.quizzes_created,
            }}
            for rank, p in enumerate(profiles[:limit], start=1)
        ]
    elif kind == "quizzes":
        queryset = _quiz_queryset().listed().order_by("-play_count", "-created_at")
        if since:
            queryset = queryset.filter(scores__created_at__gte=since).distinct()
        rows = [
            {"rank": rank, "quiz": _quiz_summary(quiz)}
            for rank, quiz in enumerate(queryset[:limit], start=1)
        ]
    elif kind == "creators":
        listed = Q(user__quizzes__is_public=True, user__quizzes__status=Quiz.Status.PUBLISHED)
        creators = (
            Profile.objects.select_related("user")
            .filter(quizzes_created__gt=0)
            .annotate(
                total_plays=Coalesce(Sum("user__quizzes__play_count", filter=listed), 0),
                total_likes=Coalesce(Sum("user__quizzes__like_count", filter=listed), 0),
            )
            .order_by("-quizzes_created", "user_id")
        )
        rows = [
            {"rank": rank, "creator": {
                "id": p.user_id,
                "name": p.name,
                "image": p.picture,
                "quizzes_created": p.quizzes_created,
                "total_plays": p.total_plays,
                "total_likes": p.total_likes,
            }}
            for rank, p in enumerate(creators[:limit], start=1)
        ]
    else:
        raise BadRequest("Invalid ranking type")

    return JsonResponse({"rankings": rows, "type": kind, "period": period})


# ===== LAJKY =====

@api_view(["GET", "POST", "DELETE"])
def likes(request):
    """
    GET: kvízy, které volající olajkoval.
    POST: olajkování kvízu ({"quiz_id": int}); 400, pokud už lajk existuje.
    DELETE: zrušení lajku (?quiz_id=); 404, pokud lajk neexistuje.
    """
    user = require_user(request)

    if request.method == "GET":
        liked = Like.objects.filter(user=user).select_related("quiz__author__profile", "quiz__category")
        return JsonResponse({"likes": [
            {"id": like.pk, "quiz_id": like.quiz_id, "created_at": isoformat(like.created_at),
             "quiz": _quiz_summary(like.quiz)}
            for like in liked
        ]})

    if request.method == "POST":
        form = LikeForm(data=parse_json(request))
        if not form.is_valid():
            raise ValidationFailed.from_form(form)
        quiz = _visible_quiz_or_404(form.cleaned_data["quiz_id"], user)
        with transaction.atomic():
            like, created = Like.objects.get_or_create(user=user, quiz=quiz)
            if not created:
                raise BadRequest("Already liked")
            Quiz.objects.filter(pk=quiz.pk).update(like_count=F("like_count") + 1)
        return JsonResponse({"id": like.pk, "quiz_id": quiz.pk}, status=201)

    quiz_id = id_param(request, "quiz_id")
    with transaction.atomic():
        deleted, _ = Like.objects.filter(user=user, quiz_id=quiz_id).delete()
        if not deleted:
            raise NotFound("Like")
        Quiz.objects.filter(pk=quiz_id, like_count__gt=0).update(like_count=F("like_count") - 1)
    return JsonResponse({"success": True})


# ===== KOMENTÁŘE =====

def _comment_user(user):
    data = _user_summary(user)
    data["is_admin"] = user_is_admin(user)
    return data


def _comment_payload(comment, with_replies=True):
    data = {
        "id": comment.pk,
        "content": comment.content,
        "user": _comment_user(comment.user),
        "question_id": comment.question_id,
        "parent_id": comment.parent_id,
        "created_at": isoformat(comment.created_at),
        "updated_at": isoformat(comment.updated_at),
    }
    if with_replies:
        data["replies"] = [_comment_payload(reply, with_replies=False) for reply in comment.replies.all()]
    return data


@api_view(["GET", "POST"])
def comments(request):
    """
    GET: komentáře nejvyšší úrovně kvízu i s odpověďmi.
        Query: quiz_id (povinné), question_id, page, limit (<= 50).
        Bez question_id se vrací jen komentáře ke kvízu jako celku.
    POST: přidání komentáře nebo odpovědi.
    """
    if request.method == "POST":
        return _create_comment(request)

    quiz = _visible_quiz_or_404(id_param(request, "quiz_id"), request.user)
    page = int_param(request, "page", 1)
    limit = int_param(request, "limit", 20, maximum=50)

    queryset = (
        Comment.objects
        .filter(quiz=quiz, parent__isnull=True, question_id=id_param(request, "question_id", required=False))
        .select_related("user__profile")
        .prefetch_related(Prefetch(
            "replies",
            queryset=Comment.objects.select_related("user__profile").order_by("created_at"),
        ))
    )
    items, total, total_pages = paginate(queryset, page, limit)
    return JsonResponse({
        "comments": [_comment_payload(comment) for comment in items],
        "total": total,
        "total_pages": total_pages,
    })


def _create_comment(request):
    user = require_user(request)
    form = CommentForm(data=parse_json(request))
    if not form.is_valid():
        raise ValidationFailed.from_form(form)
    data = form.cleaned_data
    quiz = _visible_quiz_or_404(data["quiz_id"], user)

    question = None
    if data["question_id"]:
        question = Question.objects.filter(pk=data["question_id"], quiz=quiz).first()
        if question is None:
            raise NotFound("Question")

    parent = None
    if data["parent_id"]:
        parent = Comment.objects.filter(pk=data["parent_id"], quiz=quiz, parent__isnull=True).first()
        if parent is None:
            raise NotFound("Parent comment")
        # Odpověď na komentář k otázce patří ke stejné otázce
        if parent.question_id and question is None:
            question = parent.question

    comment = Comment.objects.create(
        quiz=quiz, question=question, parent=parent, user=user, content=data["content"],
    )
    return JsonResponse(_comment_payload(comment), status=201)


@api_view(["PUT", "DELETE"])
def comment_detail(request, comment_id):
    """
    PUT: úprava vlastního komentáře.
    DELETE: smazání komentáře (jeho autor nebo autor kvízu), i s odpověďmi.
    """
    user = require_user(request)
    comment = get_object_or_404(Comment.objects.select_related("quiz", "user__profile"), pk=comment_id)

    if request.method == "PUT":
        if comment.user_id != user.pk:
            raise Forbidden()
        form = CommentUpdateForm(data=parse_json(request), instance=comment)
        if not form.is_valid():
            raise ValidationFailed.from_form(form)
        comment = form.save()
        return JsonResponse(_comment_payload(comment, with_replies=False))

    if user.pk not in (comment.user_id, comment.quiz.author_id):
        raise Forbidden()
    comment.delete()
    return JsonResponse({"success": True})


# ===== KATALOG =====

@api_view(["GET"])
def categories(request):
    listed = Q(quizzes__status=Quiz.Status.PUBLISHED, quizzes__is_public=True)
    queryset = Category.objects.annotate(quiz_count=Count("quizzes", filter=listed))
    return JsonResponse({"categories": [
        {
            "id": c.pk,
            "name": c.name,
            "slug": c.slug,
            "description": c.description,
            "icon": c.icon,
            "quiz_count": c.quiz_count,
        }
        for c in queryset
    ]})


@api_view(["GET"])
def tags(request):
    """Tagy, volitelně filtrované podle ``q`` (název nebo slug), ``limit`` <= 100."""
    limit = int_param(request, "limit", 50, maximum=100)
    queryset = Tag.objects.annotate(quiz_count=Count("quizzes"))
    if query := request.GET.get("q", "").strip():
        queryset = queryset.filter(Q(name__icontains=query) | Q(slug__icontains=query))
    return JsonResponse({"tags": [
        {"id": t.pk, "name": t.name, "slug": t.slug, "quiz_count": t.quiz_count}
        for t in queryset[:limit]
    ]})
