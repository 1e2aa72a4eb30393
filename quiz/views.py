"""
Hlavní view funkce pro stránky kvízů.

Obsahuje:
 - procházení (úvodní stránka, hledání, kategorie, detail kvízu),
 - hraní kvízu a zobrazení uloženého výsledku,
 - editor kvízů (vytvoření, úprava, smazání),
 - nástěnku, oblíbené a žebříčky.

Stránky z ``core.middleware.PROTECTED_PATHS`` předem prověří i strážce cest;
přihlášení ale skutečně vynucuje až ``login_required`` zde.
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.db.models import Count, Prefetch, Q
from django.http import Http404, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_GET

from accounts.models import Profile
from core.exceptions import TooManyRequests, ValidationFailed
from core.ratelimit import enforce_rate_limit

from .authoring import delete_quiz, save_quiz
from .forms import MAX_OPTIONS, clean_quiz_payload
from .models import Category, Comment, Like, Quiz, Score
from .scoring import record_submission, stored_results

logger = logging.getLogger(__name__)

PAGE_SIZE = 12
SORT_ORDERS = {
    "newest": ("-created_at",),
    "popular": ("-play_count", "-created_at"),
    "score": ("-avg_score", "-created_at"),
}


# ===== HELPER FUNKCE =====

def _quiz_payload_from_post(request, status):
    """
    Zpracuje formulář editoru do podoby, kterou čeká ``clean_quiz_payload``.

    Otázky přichází jako indexovaná pole (``question_0_content``,
    ``question_0_option_2``, ``question_0_option_2_correct`` ...) a čtou se
    až do prvního chybějícího indexu. Prázdné možnosti se přeskočí a správné
    odpovědi se přečíslují na zbylé možnosti.
    """
    questions = []
    question_index = 0
    while f"question_{question_index}_content" in request.POST:
        prefix = f"question_{question_index}"
        options, correct = [], []
        for option_index in range(MAX_OPTIONS):
            text = request.POST.get(f"{prefix}_option_{option_index}", "").strip()
            if not text:
                continue
            if request.POST.get(f"{prefix}_option_{option_index}_correct") == "on":
                correct.append(len(options))
            options.append(text)
        questions.append({
            "content": request.POST.get(f"{prefix}_content", "").strip(),
            "options": options,
            "correct_indices": correct,
            "is_multiple_choice": request.POST.get(f"{prefix}_multiple") == "on",
            "explanation": request.POST.get(f"{prefix}_explanation", "").strip(),
            "image_url": request.POST.get(f"{prefix}_image_url", "").strip(),
            "points": request.POST.get(f"{prefix}_points") or None,
        })
        question_index += 1

    return {
        "title": request.POST.get("title", "").strip(),
        "description": request.POST.get("description", "").strip(),
        "category_id": request.POST.get("category_id") or None,
        "tags": [tag.strip() for tag in request.POST.get("tags", "").split(",") if tag.strip()],
        "is_public": request.POST.get("is_public") == "on",
        "time_limit": request.POST.get("time_limit") or None,
        "passing_score": request.POST.get("passing_score") or None,
        "status": status,
        "questions": questions,
    }


def _editor_context(quiz=None, payload=None, errors=None):
    """Kontext šablony editoru, předvyplněný z odeslaných dat nebo uloženého kvízu."""
    if payload is None and quiz is not None:
        payload = {
            "title": quiz.title,
            "description": quiz.description,
            "category_id": quiz.category_id,
            "tags": [tag.name for tag in quiz.tags.all()],
            "is_public": quiz.is_public,
            "time_limit": quiz.time_limit,
            "passing_score": quiz.passing_score,
            "questions": [
                {
                    "content": q.content,
                    "options": q.options,
                    "correct_indices": q.correct_indices,
                    "is_multiple_choice": q.is_multiple_choice,
                    "explanation": q.explanation,
                    "image_url": q.image_url,
                    "points": q.points,
                }
                for q in quiz.questions.all()
            ],
        }
    payload = payload or {"is_public": True, "passing_score": 60, "questions": []}
    return {
        "quiz": quiz,
        "form_data": payload,
        "tags_text": ", ".join(payload.get("tags") or []),
        "questions_data": payload.get("questions") or [],
        "categories": Category.objects.all(),
        "errors": errors or {},
        "max_options": MAX_OPTIONS,
    }


def _save_from_editor(request, quiz=None):
    """
    Zvaliduje a uloží formulář editoru.

    Returns:
        Uložený kvíz, nebo HttpResponse s editorem a chybami.
    """
    status = Quiz.Status.PUBLISHED if "publish" in request.POST else Quiz.Status.DRAFT
    payload = _quiz_payload_from_post(request, status)
    try:
        quiz_data, questions = clean_quiz_payload(payload)
        return save_quiz(request.user, quiz_data, questions, quiz=quiz)
    except ValidationFailed as exc:
        messages.error(request, "The quiz could not be saved. Please fix the errors below.")
        return render(request, "quiz/editor.html", _editor_context(quiz, payload, exc.details), status=400)


def _is_number(value):
    return value.isascii() and value.isdigit()


def _listing_page(request, queryset):
    sort = request.GET.get("sort", "newest")
    queryset = queryset.order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["newest"]))
    page = Paginator(queryset, PAGE_SIZE).get_page(request.GET.get("page"))
    return page, sort


def _listed_quizzes():
    return (
        Quiz.objects.listed()
        .select_related("category", "author__profile")
        .annotate(question_count=Count("questions", distinct=True))
    )


# ===== PROCHÁZENÍ =====

def home(request):
    """Úvodní stránka: kategorie s počty kvízů, oblíbené a nejnovější kvízy."""
    categories = Category.objects.annotate(
        quiz_count=Count("quizzes", filter=Q(quizzes__status=Quiz.Status.PUBLISHED, quizzes__is_public=True))
    )
    return render(request, "quiz/home.html", {
        "categories": categories,
        "popular": _listed_quizzes().order_by("-play_count", "-created_at")[:6],
        "newest": _listed_quizzes().order_by("-created_at")[:6],
    })


def search(request):
    """Hledání ve veřejných kvízech podle názvu nebo popisu, volitelně v kategorii."""
    queryset = _listed_quizzes()
    query = request.GET.get("q", "").strip()
    if query:
        queryset = queryset.filter(Q(title__icontains=query) | Q(description__icontains=query))
    if category := request.GET.get("category"):
        queryset = queryset.filter(category__slug=category)
    page, sort = _listing_page(request, queryset)
    return render(request, "quiz/search.html", {
        "page": page,
        "query": query,
        "sort": sort,
        "category": category,
        "categories": Category.objects.all(),
    })


def category(request, slug):
    category = get_object_or_404(Category, slug=slug)
    page, sort = _listing_page(request, _listed_quizzes().filter(category=category))
    return render(request, "quiz/category.html", {"category": category, "page": page, "sort": sort})


def quiz_detail(request, quiz_id):
    """
    Detail kvízu s lajky a komentáři.

    Koncepty a soukromé kvízy jsou 404 pro všechny kromě autora.
    """
    quiz = get_object_or_404(Quiz.objects.select_related("category", "author__profile"), id=quiz_id)
    if not quiz.is_visible_to(request.user):
        raise Http404("Quiz not found")

    comments = (
        Comment.objects.filter(quiz=quiz, parent__isnull=True)
        .select_related("user__profile")
        .prefetch_related(Prefetch("replies", queryset=Comment.objects.select_related("user__profile").order_by("created_at")))
    )
    context = {
        "quiz": quiz,
        "question_count": quiz.questions.count(),
        "tags": quiz.tags.all(),
        "comments": comments,
        "liked": False,
        "best_score": None,
    }
    if request.user.is_authenticated:
        context["liked"] = Like.objects.filter(user=request.user, quiz=quiz).exists()
        context["best_score"] = Score.objects.filter(user=request.user, quiz=quiz).order_by("-percentage").first()
    return render(request, "quiz/detail.html", context)


# ===== HRANÍ =====

@login_required
def quiz_play(request, quiz_id):
    """
    Hraní kvízu v jednom formuláři.

    GET: všechny otázky s možnostmi, bez správných odpovědí
    POST: vyhodnocení odpovědí, uložení hry a přesměrování na výsledek
    """
    quiz = get_object_or_404(Quiz, id=quiz_id)
    if not quiz.is_visible_to(request.user):
        raise Http404("Quiz not found")
    questions = quiz.questions.all()

    if not questions.exists():
        messages.warning(request, "This quiz has no questions yet.")
        return redirect("quiz_edit", quiz_id=quiz.id) if request.user == quiz.author else redirect("quiz_detail", quiz_id=quiz.id)

    if request.method == "POST":
        try:
            enforce_rate_limit(request, "score")
        except TooManyRequests as exc:
            messages.error(request, f"Too many submissions. Try again in {exc.retry_after} seconds.")
            return redirect("quiz_play", quiz_id=quiz.id)

        answers = {}
        for question in questions:
            key = f"question_{question.id}"
            if key not in request.POST:
                continue
            answers[question.id] = [int(value) for value in request.POST.getlist(key) if _is_number(value)]
        time_spent = request.POST.get("time_spent", "")
        score, _ = record_submission(
            request.user, quiz, answers,
            time_spent=int(time_spent) if _is_number(time_spent) else None,
        )
        return redirect("quiz_result", score_id=score.id)

    return render(request, "quiz/play.html", {"quiz": quiz, "questions": questions})


@login_required
def quiz_result(request, score_id):
    """Uložená hra s odpověďmi a vysvětleními po otázkách."""
    score = get_object_or_404(Score.objects.select_related("quiz"), id=score_id, user=request.user)
    return render(request, "quiz/result.html", {
        "score": score,
        "quiz": score.quiz,
        "results": stored_results(score),
    })


# ===== EDITOR =====

@login_required
def quiz_create(request):
    """Vytvoření kvízu; tlačítko "publish" ho zveřejní, jinak se uloží koncept."""
    if request.method == "POST":
        try:
            enforce_rate_limit(request, "create")
        except TooManyRequests as exc:
            messages.error(request, f"You are creating quizzes too fast. Try again in {exc.retry_after} seconds.")
            return render(request, "quiz/editor.html", _editor_context(payload=_quiz_payload_from_post(request, Quiz.Status.DRAFT)), status=429)

        result = _save_from_editor(request)
        if isinstance(result, HttpResponse):
            return result
        messages.success(request, f"Quiz '{result.title}' was saved.")
        return redirect("dashboard")

    return render(request, "quiz/editor.html", _editor_context())


@login_required
def quiz_edit(request, quiz_id):
    """Úprava vlastního kvízu. Otázky se nahrazují celé, dokud kvíz nikdo nehrál."""
    quiz = get_object_or_404(Quiz, id=quiz_id, author=request.user)

    if request.method == "POST":
        result = _save_from_editor(request, quiz)
        if isinstance(result, HttpResponse):
            return result
        messages.success(request, f"Quiz '{result.title}' was updated.")
        return redirect("dashboard")

    return render(request, "quiz/editor.html", _editor_context(quiz))


@login_required
def quiz_delete(request, quiz_id):
    quiz = get_object_or_404(Quiz, id=quiz_id, author=request.user)
    if request.method == "POST":
        delete_quiz(quiz)
        messages.success(request, "The quiz was deleted.")
        return redirect("dashboard")
    return render(request, "quiz/delete.html", {"quiz": quiz})


# ===== OSOBNÍ STRÁNKY =====

@login_required
def dashboard(request):
    """Vlastní kvízy (včetně konceptů), poslední hry a čítače z profilu."""
    profile, _ = Profile.objects.get_or_create(user=request.user)
    return render(request, "quiz/dashboard.html", {
        "profile": profile,
        "quizzes": (
            Quiz.objects.filter(author=request.user)
            .select_related("category")
            .annotate(question_count=Count("questions", distinct=True))
        ),
        "scores": Score.objects.filter(user=request.user).select_related("quiz")[:10],
    })


@login_required
def favorites(request):
    """Olajkované kvízy, které uživatel stále smí vidět."""
    likes = (
        Like.objects.filter(user=request.user)
        .filter(Q(quiz__status=Quiz.Status.PUBLISHED, quiz__is_public=True) | Q(quiz__author=request.user))
        .select_related("quiz__category", "quiz__author__profile")
    )
    return render(request, "quiz/favorites.html", {"likes": likes})


def rankings(request):
    """Nejlepší hráči podle celkového skóre a nejhranější kvízy."""
    return render(request, "quiz/rankings.html", {
        "players": Profile.objects.select_related("user").filter(quizzes_taken__gt=0).order_by("-total_score", "user_id")[:20],
        "quizzes": _listed_quizzes().order_by("-play_count", "-created_at")[:20],
    })


@require_GET
def robots_txt(request):
    lines = [
        "User-agent: *",
        "Allow: /",
        "Disallow: /api/",
        "Disallow: /dashboard/",
        "Disallow: /create/",
        "Disallow: /edit/",
        "Disallow: /settings/",
        "Disallow: /admin/",
        "Disallow: /django-admin/",
        f"Sitemap: {request.build_absolute_uri('/sitemap.xml')}",
    ]
    return HttpResponse("\n".join(lines) + "\n", content_type="text/plain")
