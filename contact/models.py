"""
Modely zpráv pro provozovatele webu.

 - Contact: veřejný kontaktní formulář, který spravují administrátoři,
 - Feedback: zpětná vazba rozdělená do kategorií, autor ji vidí zpět.
"""
from django.conf import settings
from django.db import models


class Contact(models.Model):
    class Status(models.TextChoices):
        UNREAD = "unread", "Unread"
        READ = "read", "Read"
        REPLIED = "replied", "Replied"
        CLOSED = "closed", "Closed"

    name = models.CharField(max_length=100)
    email = models.EmailField()
    content = models.TextField(max_length=5000)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name="contacts"
    )
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.UNREAD, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} <{self.email}>"


class Feedback(models.Model):
    class Category(models.TextChoices):
        INQUIRY = "inquiry", "Inquiry"
        FEATURE_REQUEST = "feature_request", "Feature request"
        BUG_REPORT = "bug_report", "Bug report"
        OTHER = "other", "Other"

    class Status(models.TextChoices):
        OPEN = "open", "Open"
        IN_PROGRESS = "in_progress", "In progress"
        RESOLVED = "resolved", "Resolved"
        CLOSED = "closed", "Closed"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name="feedback"
    )
    category = models.CharField(max_length=20, choices=Category.choices)
    content = models.TextField(max_length=5000)
    email = models.EmailField(blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.OPEN, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Feedback"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.get_category_display()}: {self.content[:50]}"
