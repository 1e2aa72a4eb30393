import json
from types import SimpleNamespace

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse

from accounts.models import Profile
from accounts.roles import user_is_admin
from accounts.signals import fill_profile_on_signup
from quiz.models import Quiz
from quiz.tests.helpers import make_quiz, make_user, sign_in


def body(response):
    return json.loads(response.content)


class ProfileModelTests(TestCase):
    def test_every_user_gets_a_profile(self):
        user = make_user("ada")
        self.assertTrue(Profile.objects.filter(user=user).exists())

    def test_name_and_picture_fallbacks(self):
        user = make_user("ada", first_name="Ada", last_name="Lovelace")
        profile = user.profile
        self.assertEqual(profile.name, "Ada Lovelace")
        self.assertIsNone(profile.picture)
        profile.display_name = "countess"
        profile.image_url = "https://example.com/ada.png"
        self.assertEqual(profile.name, "countess")
        self.assertEqual(profile.picture, "https://example.com/ada.png")

    def test_signup_copies_provider_data(self):
        user = make_user("ada")
        account = SimpleNamespace(
            extra_data={"name": "Ada L."},
            get_avatar_url=lambda: "https://avatars.example.com/ada.png",
        )
        fill_profile_on_signup(request=None, user=user, sociallogin=SimpleNamespace(account=account))
        profile = Profile.objects.get(user=user)
        self.assertEqual(profile.display_name, "Ada L.")
        self.assertEqual(profile.image_url, "https://avatars.example.com/ada.png")


class RoleTests(TestCase):
    def test_admin_allowlist(self):
        self.assertTrue(user_is_admin(make_user("boss", email="admin@example.com")))
        self.assertFalse(user_is_admin(make_user("ada")))

    @override_settings(ADMIN_EMAILS="ada@example.com")
    def test_allowlist_is_read_once_at_startup(self):
        self.assertFalse(user_is_admin(make_user("ada")))


class UsersApiTests(TestCase):
    def setUp(self):
        self.user = make_user("ada")
        self.quiz = make_quiz(self.user, title="Public one")
        make_quiz(self.user, title="Hidden draft", status=Quiz.Status.DRAFT)

    def test_me_requires_sign_in(self):
        self.assertEqual(self.client.get("/api/users/me/").status_code, 401)

    def test_me_includes_email_and_recent_quizzes(self):
        self.client.force_login(self.user)
        data = body(self.client.get("/api/users/me/"))
        self.assertEqual(data["user"]["email"], "ada@example.com")
        self.assertEqual(len(data["recent_quizzes"]), 2)
        self.assertEqual(data["recent_scores"], [])

    def test_public_profile_shows_listed_quizzes_only(self):
        data = body(self.client.get(f"/api/users/{self.user.pk}/"))
        self.assertNotIn("email", data["user"])
        self.assertEqual([q["title"] for q in data["recent_quizzes"]], ["Public one"])
        self.assertEqual(self.client.get("/api/users/999999/").status_code, 404)


class ProfilePageTests(TestCase):
    def setUp(self):
        self.user = make_user("ada")
        sign_in(self.client, self.user)

    def test_own_profile(self):
        make_quiz(self.user, title="My draft", status=Quiz.Status.DRAFT)
        self.assertContains(self.client.get(reverse("profile")), "My draft")

    def test_public_profile_of_someone_else(self):
        other = make_user("bob")
        make_quiz(other, title="Bob's draft", status=Quiz.Status.DRAFT)
        response = self.client.get(reverse("public_profile", args=[other.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertNotContains(response, "Bob&#x27;s draft")

    def test_public_profile_of_self_redirects(self):
        response = self.client.get(reverse("public_profile", args=[self.user.pk]))
        self.assertRedirects(response, reverse("profile"))

    def test_settings_updates_profile(self):
        response = self.client.post(reverse("settings"), {"display_name": "Countess", "bio": "Math"})
        self.assertRedirects(response, reverse("settings"))
        self.user.profile.refresh_from_db()
        self.assertEqual(self.user.profile.display_name, "Countess")

    @override_settings(AVATAR_MAX_BYTES=10)
    def test_settings_rejects_large_avatar(self):
        avatar = SimpleUploadedFile("a.gif", b"GIF89a" + b"\x00" * 64, content_type="image/gif")
        response = self.client.post(reverse("settings"), {"display_name": "Ada", "avatar": avatar})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context["form"].errors)
