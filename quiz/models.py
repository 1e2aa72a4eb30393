"""
Modely kvízů a her.

Obsahuje:
 - strukturu katalogu (Category, Tag),
 - obsah kvízu (Quiz, Question),
 - výsledky hry (Score, AnswerHistory),
 - sociální funkce (Like, Comment).
"""

from django.conf import settings
from django.db import models
from django.utils import timezone


class Category(models.Model):
    """Hlavní kategorie zobrazená na úvodní stránce a v editoru kvízů."""
    name = models.CharField(max_length=50, unique=True)
    slug = models.SlugField(max_length=50, unique=True)
    description = models.CharField(max_length=200, blank=True)
    icon = models.CharField(max_length=16, blank=True)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name_plural = "Categories"
        ordering = ["order", "name"]

    def __str__(self):
        return self.name


class Tag(models.Model):
    name = models.CharField(max_length=50, unique=True)
    slug = models.SlugField(max_length=50, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class QuizQuerySet(models.QuerySet):
    def published(self):
        return self.filter(status=Quiz.Status.PUBLISHED)

    def listed(self):
        """Kvízy, které může najít kdokoli: zveřejněné a veřejné."""
        return self.filter(status=Quiz.Status.PUBLISHED, is_public=True)

    def visible_to(self, user):
        """Veřejně dostupné kvízy a k tomu vše, co uživatel sám vytvořil."""
        if user is not None and user.is_authenticated:
            return self.filter(
                models.Q(status=Quiz.Status.PUBLISHED, is_public=True) | models.Q(author=user)
            )
        return self.listed()


class Quiz(models.Model):
    """
    Kvíz vytvořený uživatelem.

    Koncept vidí jen jeho autor. Zveřejněný kvíz vidí všichni, pokud je
    nastaveno ``is_public``, jinak opět jen autor.
    ``play_count``, ``avg_score`` a ``like_count`` udržuje vyhodnocení her
    a view pro lajky.
    """

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"

    title = models.CharField(max_length=100)
    description = models.TextField(max_length=1000, blank=True)
    category = models.ForeignKey(Category, null=True, blank=True, on_delete=models.SET_NULL, related_name="quizzes")
    tags = models.ManyToManyField(Tag, blank=True, related_name="quizzes")
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="quizzes")
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.DRAFT, db_index=True)
    is_public = models.BooleanField(default=True)
    time_limit = models.PositiveIntegerField(null=True, blank=True, help_text="Seconds for the whole quiz (30-7200)")
    passing_score = models.PositiveIntegerField(default=60, help_text="Percentage needed to pass (0-100)")
    play_count = models.PositiveIntegerField(default=0, db_index=True)
    avg_score = models.FloatField(null=True, blank=True)
    like_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    published_at = models.DateTimeField(null=True, blank=True)

    objects = QuizQuerySet.as_manager()

    class Meta:
        verbose_name_plural = "Quizzes"
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        """Při prvním zveřejnění nastaví ``published_at``."""
        if self.status == self.Status.PUBLISHED and self.published_at is None:
            self.published_at = timezone.now()
        super().save(*args, **kwargs)

    @property
    def is_published(self):
        return self.status == self.Status.PUBLISHED

    def is_visible_to(self, user):
        if user is not None and user.is_authenticated and user.pk == self.author_id:
            return True
        return self.is_published and self.is_public


class Question(models.Model):
    """
    Otázka kvízu.

    ``options`` je seřazený seznam textů odpovědí a ``correct_indices``
    pozice těch správných. Na pořadí ``correct_indices`` nezáleží. Po první
    odehrané hře se otázky kvízu nemění, uložená historie odpovědí odkazuje
    na pozice možností.
    """
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name="questions")
    content = models.TextField(max_length=1000)
    options = models.JSONField(default=list)
    correct_indices = models.JSONField(default=list)
    is_multiple_choice = models.BooleanField(default=False)
    explanation = models.TextField(max_length=2000, blank=True)
    image_url = models.URLField(blank=True)
    points = models.PositiveIntegerField(default=10)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["order", "id"]

    def __str__(self):
        return self.content[:50] + "..." if len(self.content) > 50 else self.content


class Score(models.Model):
    """Jedna odeslaná hra kvízu."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="scores")
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name="scores")
    score = models.PositiveIntegerField()
    max_score = models.PositiveIntegerField()
    percentage = models.FloatField()
    correct_count = models.PositiveIntegerField()
    total_count = models.PositiveIntegerField()
    time_spent = models.PositiveIntegerField(null=True, blank=True, help_text="Seconds")
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.user} - {self.quiz} ({self.score}/{self.max_score})"

    @property
    def passed(self):
        return self.percentage >= self.quiz.passing_score


class AnswerHistory(models.Model):
    """Co hráč v jedné hře vybral u jedné otázky."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="answer_history")
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="answer_history")
    score = models.ForeignKey(Score, on_delete=models.CASCADE, related_name="answers")
    selected_indices = models.JSONField(default=list)
    is_correct = models.BooleanField(default=False)
    time_spent = models.PositiveIntegerField(null=True, blank=True, help_text="Seconds")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "Answer history"
        unique_together = ("score", "question")
        ordering = ["question__order", "question_id"]


class Like(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="likes")
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name="likes")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("user", "quiz")
        ordering = ["-created_at"]


class Comment(models.Model):
    """
    Komentář ke kvízu nebo k jedné z jeho otázek.

    Odpovědi odkazují na komentář nejvyšší úrovně v ``parent``; odpovědi na
    odpovědi nejsou podporované. Smazání komentáře smaže i odpovědi.
    """
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name="comments")
    question = models.ForeignKey(Question, null=True, blank=True, on_delete=models.CASCADE, related_name="comments")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="comments")
    parent = models.ForeignKey("self", null=True, blank=True, on_delete=models.CASCADE, related_name="replies")
    content = models.TextField(max_length=2000)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.content[:50] + "..." if len(self.content) > 50 else self.content
