from django import forms
from django.conf import settings

from .models import Profile


class ProfileForm(forms.ModelForm):
    class Meta:
        model = Profile
        fields = ["display_name", "bio", "avatar"]
        widgets = {
            "display_name": forms.TextInput(attrs={
                "class": "form-control",
                "placeholder": "Display name",
            }),
            "bio": forms.Textarea(attrs={"class": "form-control", "rows": 4}),
        }

    def clean_avatar(self):
        avatar = self.cleaned_data.get("avatar")
        if avatar and hasattr(avatar, "size") and avatar.size > settings.AVATAR_MAX_BYTES:
            raise forms.ValidationError("Avatar must be 2 MB or smaller.")
        return avatar
