"""Request forms for account endpoints."""

from typing_extensions import override

from django import forms
from django.contrib.auth.password_validation import validate_password

from filebox.apps.accounts.models import User


class SignupForm(forms.Form):
    """Signup request: username, email and password."""

    username = forms.CharField(max_length=150)
    email = forms.EmailField(max_length=254)
    password = forms.CharField(strip=False)

    @override
    def clean(self) -> dict[str, object]:
        """Run the configured password validators."""
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        if password:
            candidate = User(
                username=cleaned_data.get('username', ''),
                email=cleaned_data.get('email', ''),
            )
            try:
                validate_password(password, user=candidate)
            except forms.ValidationError as error:
                self.add_error('password', error)
        return cleaned_data


class LoginForm(forms.Form):
    """Login request: username and password."""

    username = forms.CharField(max_length=150)
    password = forms.CharField(strip=False)
