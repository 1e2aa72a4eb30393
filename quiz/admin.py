"""
Registrace modelů kvízů do Django adminu.
"""
from django.contrib import admin

from .models import AnswerHistory, Category, Comment, Like, Question, Quiz, Score, Tag


class QuestionInline(admin.StackedInline):
    model = Question
    extra = 0


@admin.register(Quiz)
class QuizAdmin(admin.ModelAdmin):
    list_display = ("title", "author", "category", "status", "is_public", "play_count", "created_at")
    list_filter = ("status", "is_public", "category")
    search_fields = ("title", "description", "author__username")
    inlines = [QuestionInline]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "order")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Score)
class ScoreAdmin(admin.ModelAdmin):
    list_display = ("user", "quiz", "score", "max_score", "percentage", "created_at")
    list_filter = ("quiz",)


admin.site.register(Tag)
admin.site.register(AnswerHistory)
admin.site.register(Like)
admin.site.register(Comment)
