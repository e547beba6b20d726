from django import forms
from django.contrib.auth import authenticate
from django.contrib.auth.forms import UserCreationForm
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError

from profiles.models import GENDER_CHOICES
from .models import CustomUser


class SignUpForm(forms.ModelForm):
    password = forms.CharField(strip=False)
    gender = forms.ChoiceField(choices=GENDER_CHOICES, required=False)
    university = forms.CharField(max_length=150, required=False)

    class Meta:
        model = CustomUser
        fields = ('name', 'email')

    def clean_email(self):
        email = CustomUser.objects.normalize_email(self.cleaned_data['email']).lower()
        if CustomUser.objects.filter(email__iexact=email).exists():
            raise ValidationError("An account with this email already exists.")
        return email

    def clean_name(self):
        name = self.cleaned_data['name'].strip()
        if not name:
            raise ValidationError("Please tell us your name.")
        return name

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        if password:
            candidate = CustomUser(
                email=cleaned_data.get('email', ''),
                name=cleaned_data.get('name', '')
            )
            try:
                validate_password(password, user=candidate)
            except ValidationError as e:
                self.add_error('password', e)
        return cleaned_data

    def save(self, commit=True):
        user = super().save(commit=False)
        user.set_password(self.cleaned_data['password'])
        if commit:
            user.save()
        return user


class SignInForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(strip=False)

    def __init__(self, *args, request=None, **kwargs):
        self.request = request
        self.user_cache = None
        super().__init__(*args, **kwargs)

    def clean(self):
        email = self.cleaned_data.get('email')
        password = self.cleaned_data.get('password')

        if email and password:
            self.user_cache = authenticate(
                self.request,
                username=email.lower(),
                password=password
            )
            if self.user_cache is None:
                raise ValidationError("Invalid email or password.", code='invalid_login')

        return self.cleaned_data

    def get_user(self):
        return self.user_cache


class AdminUserCreationForm(UserCreationForm):
    """Admin "add user" form for email-based accounts"""

    class Meta:
        model = CustomUser
        fields = ('email', 'name')
        field_classes = {}
