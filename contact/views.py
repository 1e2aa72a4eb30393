"""
Stránky kontaktního formuláře, zpětné vazby a moderace zpráv.
"""
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied
from django.core.paginator import Paginator
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.roles import user_is_admin
from core.exceptions import TooManyRequests
from core.ratelimit import enforce_rate_limit

from .api import create_contact, create_feedback
from .forms import ContactForm, ContactStatusForm, FeedbackForm
from .models import Contact


def contact(request):
    """
    Veřejný kontaktní formulář.

    GET: prázdný formulář, u přihlášeného předvyplněné jméno a e-mail
    POST: validace, uložení a poděkování odesílateli
    """
    if request.method == "POST":
        form = ContactForm(request.POST)
        try:
            enforce_rate_limit(request, "contact")
        except TooManyRequests as exc:
            messages.error(request, f"Too many messages. Please try again in {exc.retry_after} seconds.")
            return render(request, "contact/contact.html", {"form": form}, status=429)
        if form.is_valid():
            create_contact(form, request.user)
            messages.success(request, "Thank you, your message has been sent.")
            return redirect("contact")
    else:
        initial = {}
        if request.user.is_authenticated:
            initial = {"name": request.user.get_full_name() or request.user.username, "email": request.user.email}
        form = ContactForm(initial=initial)
    return render(request, "contact/contact.html", {"form": form})


def feedback(request):
    anonymous = not request.user.is_authenticated
    if request.method == "POST":
        form = FeedbackForm(request.POST, anonymous=anonymous)
        if form.is_valid():
            create_feedback(form, request.user)
            messages.success(request, "Thank you for your feedback.")
            return redirect("feedback")
    else:
        form = FeedbackForm(anonymous=anonymous)
    own = request.user.feedback.all()[:20] if not anonymous else []
    return render(request, "contact/feedback.html", {"form": form, "own_feedback": own})


def _require_site_admin(request):
    if not user_is_admin(request.user):
        raise PermissionDenied


@login_required
def admin_contacts(request):
    """Seznam zpráv k moderaci, lze filtrovat podle stavu."""
    _require_site_admin(request)
    queryset = Contact.objects.select_related("user")
    status = request.GET.get("status", "")
    if status in Contact.Status.values:
        queryset = queryset.filter(status=status)
    page = Paginator(queryset, 20).get_page(request.GET.get("page"))
    return render(request, "contact/admin_contacts.html", {
        "page": page,
        "status": status,
        "statuses": Contact.Status.choices,
    })


@login_required
@require_POST
def admin_contact_update(request, contact_id):
    """Změní stav zprávy, nebo ji smaže při ``action=delete``."""
    _require_site_admin(request)
    contact = get_object_or_404(Contact, id=contact_id)
    if request.POST.get("action") == "delete":
        contact.delete()
        messages.success(request, "The message was deleted.")
    else:
        form = ContactStatusForm(request.POST)
        if form.is_valid():
            contact.status = form.cleaned_data["status"]
            contact.save(update_fields=["status", "updated_at"])
            messages.success(request, "Status updated.")
        else:
            messages.error(request, "Invalid status.")
    return redirect("admin_contacts")
