"""
Hlavní konfigurace URL.

Definuje všechny cesty webu:
- JSON API pod /api/
- stránky kvízů (procházení, hraní, výsledky, editor)
- profil, kontakt a zpětná vazba
- přihlášení (allauth) a Django admin
- sitemap.xml a robots.txt
"""
from django.conf import settings
from django.contrib import admin
from django.contrib.sitemaps.views import sitemap
from django.urls import include, path

from accounts import api as accounts_api
from accounts import views as accounts_views
from contact import api as contact_api
from contact import views as contact_views
from quiz import api as quiz_api
from quiz import views as quiz_views
from quiz.sitemaps import sitemaps

api_patterns = [
    # Kvízy a hraní
    path("quizzes/", quiz_api.quizzes, name="api_quizzes"),
    path("quizzes/<int:quiz_id>/", quiz_api.quiz_detail, name="api_quiz_detail"),
    path("quizzes/<int:quiz_id>/questions/", quiz_api.quiz_questions, name="api_quiz_questions"),
    path("quizzes/<int:quiz_id>/check-answer/", quiz_api.check_answer, name="api_check_answer"),
    path("scores/", quiz_api.scores, name="api_scores"),
    path("scores/<int:score_id>/", quiz_api.score_detail, name="api_score_detail"),

    # Procházení a sociální funkce
    path("rankings/", quiz_api.rankings, name="api_rankings"),
    path("likes/", quiz_api.likes, name="api_likes"),
    path("comments/", quiz_api.comments, name="api_comments"),
    path("comments/<int:comment_id>/", quiz_api.comment_detail, name="api_comment_detail"),
    path("categories/", quiz_api.categories, name="api_categories"),
    path("tags/", quiz_api.tags, name="api_tags"),

    # Uživatelé
    path("users/me/", accounts_api.me, name="api_users_me"),
    path("users/<int:user_id>/", accounts_api.user_detail, name="api_user_detail"),

    # Kontakt, zpětná vazba a moderace
    path("contacts/", contact_api.contacts, name="api_contacts"),
    path("feedback/", contact_api.feedback, name="api_feedback"),
    path("admin/check/", contact_api.admin_check, name="api_admin_check"),
    path("admin/contacts/", contact_api.admin_contacts, name="api_admin_contacts"),
    path("admin/contacts/<int:contact_id>/", contact_api.admin_contact_detail, name="api_admin_contact_detail"),
]

urlpatterns = [
    # Hlavní stránka a procházení
    path("", quiz_views.home, name="home"),
    path("search/", quiz_views.search, name="search"),
    path("rankings/", quiz_views.rankings, name="rankings"),
    path("quiz/category/<slug:slug>/", quiz_views.category, name="quiz_category"),
    path("quiz/<int:quiz_id>/", quiz_views.quiz_detail, name="quiz_detail"),

    # Hraní a výsledky
    path("quiz/<int:quiz_id>/play/", quiz_views.quiz_play, name="quiz_play"),
    path("result/<int:score_id>/", quiz_views.quiz_result, name="quiz_result"),

    # Editor kvízů
    path("create/", quiz_views.quiz_create, name="quiz_create"),
    path("edit/<int:quiz_id>/", quiz_views.quiz_edit, name="quiz_edit"),
    path("edit/<int:quiz_id>/delete/", quiz_views.quiz_delete, name="quiz_delete"),

    # Osobní stránky
    path("dashboard/", quiz_views.dashboard, name="dashboard"),
    path("favorites/", quiz_views.favorites, name="favorites"),
    path("profile/", accounts_views.profile, name="profile"),
    path("profile/<int:user_id>/", accounts_views.public_profile, name="public_profile"),
    path("settings/", accounts_views.settings_view, name="settings"),

    # Kontakt, zpětná vazba a moderace
    path("contact/", contact_views.contact, name="contact"),
    path("feedback/", contact_views.feedback, name="feedback"),
    path("admin/contacts/", contact_views.admin_contacts, name="admin_contacts"),
    path("admin/contacts/<int:contact_id>/", contact_views.admin_contact_update, name="admin_contact_update"),

    # JSON API
    path("api/", include(api_patterns)),

    # Přihlášení (Google a GitHub přes allauth)
    path("accounts/", include("allauth.urls")),

    # Django admin
    path("django-admin/", admin.site.urls),

    # SEO soubory
    path("sitemap.xml", sitemap, {"sitemaps": sitemaps}, name="django.contrib.sitemaps.views.sitemap"),
    path("robots.txt", quiz_views.robots_txt, name="robots_txt"),
]

# V DEBUG režimu Django servíruje statické a nahrané soubory
if settings.DEBUG:
    from django.conf.urls.static import static
    from django.contrib.staticfiles.urls import staticfiles_urlpatterns

    urlpatterns += staticfiles_urlpatterns()
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
