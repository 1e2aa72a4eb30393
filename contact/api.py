"""
JSON API pro kontaktní zprávy, zpětnou vazbu a moderaci.
"""
import logging

from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from accounts.roles import require_admin, user_is_admin
from core.api import api_view, int_param, isoformat, paginate, parse_json, require_user, sanitize_input
from core.exceptions import BadRequest, ValidationFailed
from core.ratelimit import rate_limit

from .forms import ContactForm, ContactStatusForm, FeedbackForm
from .models import Contact, Feedback

logger = logging.getLogger(__name__)


def _contact_payload(contact):
    user = contact.user
    return {
        "id": contact.pk,
        "name": contact.name,
        "email": contact.email,
        "content": contact.content,
        "status": contact.status,
        "user": {"id": user.pk, "name": user.profile.name, "image": user.profile.picture} if user else None,
        "created_at": isoformat(contact.created_at),
        "updated_at": isoformat(contact.updated_at),
    }


def _feedback_payload(feedback):
    return {
        "id": feedback.pk,
        "category": feedback.category,
        "content": feedback.content,
        "status": feedback.status,
        "created_at": isoformat(feedback.created_at),
        "updated_at": isoformat(feedback.updated_at),
    }


def create_contact(form, user=None):
    """Uloží zvalidovanou zprávu, text s escapovaným HTML."""
    contact = Contact.objects.create(
        name=sanitize_input(form.cleaned_data["name"]),
        email=form.cleaned_data["email"],
        content=sanitize_input(form.cleaned_data["content"]),
        user=user if user is not None and user.is_authenticated else None,
    )
    logger.info("Contact message %s received", contact.pk)
    return contact


def create_feedback(form, user=None):
    signed_in = user is not None and user.is_authenticated
    feedback = Feedback.objects.create(
        user=user if signed_in else None,
        category=form.cleaned_data["category"],
        content=sanitize_input(form.cleaned_data["content"]),
        email=form.cleaned_data["email"] or (user.email if signed_in else ""),
    )
    logger.info("Feedback %s (%s) received", feedback.pk, feedback.category)
    return feedback


# ===== VEŘEJNÉ =====

@api_view(["POST"])
@rate_limit("contact")
def contacts(request):
    """
    Odeslání kontaktního formuláře.

    Tělo: {"name": str, "email": str, "content": str}
    Omezeno pro každou IP klienta limitem ``contact``.
    """
    form = ContactForm(data=parse_json(request))
    if not form.is_valid():
        raise ValidationFailed.from_form(form)
    contact = create_contact(form, request.user)
    return JsonResponse({"id": contact.pk, "message": "Your message has been sent."}, status=201)


@api_view(["GET", "POST"])
def feedback(request):
    """
    GET: vlastní zpětná vazba volajícího.
        Query: page, limit (<= 50), status (open|in_progress|resolved|closed|all), category.
    POST: odeslání zpětné vazby; bez přihlášení je ``email`` povinný.
    """
    if request.method == "POST":
        form = FeedbackForm(data=parse_json(request), anonymous=not request.user.is_authenticated)
        if not form.is_valid():
            raise ValidationFailed.from_form(form)
        return JsonResponse(_feedback_payload(create_feedback(form, request.user)), status=201)

    user = require_user(request)
    page = int_param(request, "page", 1)
    limit = int_param(request, "limit", 20, maximum=50)
    queryset = Feedback.objects.filter(user=user)

    status = request.GET.get("status")
    if status and status != "all":
        if status not in Feedback.Status.values:
            raise BadRequest("Invalid status")
        queryset = queryset.filter(status=status)
    if category := request.GET.get("category"):
        if category not in Feedback.Category.values:
            raise BadRequest("Invalid category")
        queryset = queryset.filter(category=category)

    items, total, total_pages = paginate(queryset, page, limit)
    return JsonResponse({
        "feedback": [_feedback_payload(item) for item in items],
        "total": total,
        "total_pages": total_pages,
    })


# ===== MODERACE =====

@api_view(["GET"])
def admin_check(request):
    return JsonResponse({"is_admin": user_is_admin(request.user)})


@api_view(["GET"])
def admin_contacts(request):
    """
    Zprávy k moderaci, nejnovější první.

    Query: status, page, limit (<= 50).
    """
    require_admin(request)
    page = int_param(request, "page", 1)
    limit = int_param(request, "limit", 20, maximum=50)
    queryset = Contact.objects.select_related("user__profile")
    if status := request.GET.get("status"):
        if status not in Contact.Status.values:
            raise BadRequest("Invalid status")
        queryset = queryset.filter(status=status)

    items, total, total_pages = paginate(queryset, page, limit)
    return JsonResponse({
        "contacts": [_contact_payload(contact) for contact in items],
        "pagination": {"page": page, "limit": limit, "total": total, "total_pages": total_pages},
    })


@api_view(["PATCH", "DELETE"])
def admin_contact_detail(request, contact_id):
    """
    PATCH: změna stavu. Tělo: {"status": "unread"|"read"|"replied"|"closed"}
    DELETE: smazání zprávy.
    """
    admin = require_admin(request)
    contact = get_object_or_404(Contact.objects.select_related("user__profile"), pk=contact_id)

    if request.method == "DELETE":
        contact.delete()
        logger.info("Contact message %s deleted by %s", contact_id, admin.pk)
        return JsonResponse({"success": True})

    form = ContactStatusForm(data=parse_json(request))
    if not form.is_valid():
        raise ValidationFailed.from_form(form)
    contact.status = form.cleaned_data["status"]
    contact.save(update_fields=["status", "updated_at"])
    logger.info("Contact message %s marked %s by %s", contact.pk, contact.status, admin.pk)
    return JsonResponse(_contact_payload(contact))
