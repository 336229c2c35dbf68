from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.utils.translation import gettext_lazy as _
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Submit, Div, Field
from crispy_forms.bootstrap import FormActions

User = get_user_model()


# LOGIN FORM
class LoginForm(forms.Form):
    email = forms.EmailField(
        label=_('Email'),
        max_length=255,
        required=True,
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('tu@email.com'),
            'autofocus': True,
        })
    )

    password = forms.CharField(
        label=_('Contraseña'),
        required=True,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Introduce tu contraseña'),
        })
    )

    def __init__(self, *args, **kwargs):

        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            Field('email', css_class='mb-3'),
            Field('password', css_class='mb-3'),
            FormActions(
                Submit('submit', _('Iniciar sesión'), css_class='btn btn-primary w-100')
            )
        )

    def clean_email(self):

        email = self.cleaned_data.get('email', '')
        return email.lower().strip()


# SIGNUP FORM
class SignupForm(forms.Form):
    """
    Account creation

    Names, phone, city, country and company name are stored as the
    user's sign-up metadata; the profile and organization are created
    on the first dashboard request.
    """

    first_name = forms.CharField(label=_('Nombre'), max_length=50)
    last_name = forms.CharField(label=_('Apellidos'), max_length=50)
    email = forms.EmailField(label=_('Email'), max_length=255)
    phone = forms.CharField(label=_('Teléfono'), max_length=20, required=False)
    city = forms.CharField(label=_('Ciudad'), max_length=100, required=False)
    country = forms.CharField(label=_('País'), max_length=100, required=False)
    company_name = forms.CharField(label=_('Empresa'), max_length=200, required=False)
    password = forms.CharField(label=_('Contraseña'), widget=forms.PasswordInput)
    confirm_password = forms.CharField(label=_('Confirmar contraseña'), widget=forms.PasswordInput)
    accept_privacy = forms.BooleanField(label=_('Acepto la Política de privacidad'), required=True,
                                        error_messages={'required': _('Debes aceptar la Política de privacidad')})

    def __init__(self, *args, **kwargs):

        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            Div(
                Div('first_name', css_class='col-md-6'),
                Div('last_name', css_class='col-md-6'),
                css_class='row'
            ),
            'email',
            'phone',
            Div(
                Div('city', css_class='col-md-6'),
                Div('country', css_class='col-md-6'),
                css_class='row'
            ),
            'company_name',
            'password',
            'confirm_password',
            'accept_privacy',
            FormActions(
                Submit('submit', _('Crear cuenta'), css_class='btn btn-primary w-100')
            )
        )

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower().strip()
        if User.objects.filter(email=email).exists():
            raise forms.ValidationError(_('Ya existe una cuenta con este email'))
        return email

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        confirm_password = cleaned_data.get('confirm_password')

        if password and confirm_password and password != confirm_password:
            self.add_error('confirm_password', _('Las contraseñas no coinciden'))
        elif password:
            try:
                validate_password(password)
            except forms.ValidationError as e:
                self.add_error('password', e)

        return cleaned_data

    def save(self):
        data = self.cleaned_data
        metadata = {
            'first_name': data['first_name'],
            'last_name': data['last_name'],
            'phone': data.get('phone', ''),
            'city': data.get('city', ''),
            'country': data.get('country', ''),
            'company_name': data.get('company_name', ''),
        }
        return User.objects.create_user(
            email=data['email'],
            password=data['password'],
            first_name=data['first_name'],
            last_name=data['last_name'],
            phone=data.get('phone', ''),
            metadata=metadata,
        )
