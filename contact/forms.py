"""
Formuláře pro kontakt a zpětnou vazbu.

Používá je JSON API (tělo požadavku jde do ``data``) i HTML stránky.
"""
from django import forms

from .models import Contact, Feedback


class ContactForm(forms.Form):
    name = forms.CharField(min_length=1, max_length=100)
    email = forms.EmailField()
    content = forms.CharField(min_length=10, max_length=5000)

    def clean_email(self):
        return self.cleaned_data["email"].lower()


class FeedbackForm(forms.Form):
    """
    Zpětná vazba od kohokoli.

    Přihlášený uživatel nemusí vyplnit ``email``; formulář dostane
    informaci, zda je odesílatel anonymní, a jen tehdy adresu vyžaduje.
    """
    category = forms.ChoiceField(choices=Feedback.Category.choices)
    content = forms.CharField(min_length=10, max_length=5000)
    email = forms.EmailField(required=False)

    def __init__(self, *args, anonymous=True, **kwargs):
        self.anonymous = anonymous
        super().__init__(*args, **kwargs)

    def clean(self):
        cleaned = super().clean()
        if self.anonymous and not cleaned.get("email") and "email" not in self.errors:
            self.add_error("email", "Email is required when you are not signed in.")
        return cleaned


class ContactStatusForm(forms.Form):
    status = forms.ChoiceField(choices=Contact.Status.choices)
