"""
Sitemap veřejně dostupných stránek.
"""
from django.contrib.sitemaps import Sitemap
from django.urls import reverse

from .models import Category, Quiz


class StaticViewSitemap(Sitemap):
    changefreq = "daily"
    priority = 1.0

    def items(self):
        return ["home", "search", "rankings", "contact"]

    def location(self, item):
        return reverse(item)


class CategorySitemap(Sitemap):
    changefreq = "weekly"
    priority = 0.8

    def items(self):
        return Category.objects.all()

    def location(self, item):
        return reverse("quiz_category", kwargs={"slug": item.slug})


class QuizSitemap(Sitemap):
    changefreq = "weekly"
    priority = 0.7

    def items(self):
        return Quiz.objects.listed().order_by("-updated_at")

    def lastmod(self, item):
        return item.updated_at

    def location(self, item):
        return reverse("quiz_detail", kwargs={"quiz_id": item.pk})


sitemaps = {
    "static": StaticViewSitemap,
    "categories": CategorySitemap,
    "quizzes": QuizSitemap,
}
