from django import forms
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from .models import Prospect


class ProspectFilterForm(forms.Form):
    """Filters of the prospect table (all optional)"""

    query = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Buscar por nombre, email o teléfono'),
        })
    )

    location = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': _('Ubicación')})
    )

    status = forms.MultipleChoiceField(
        required=False,
        choices=Prospect.STATUS_CHOICES,
        widget=forms.SelectMultiple(attrs={'class': 'form-select'})
    )

    score_min = forms.FloatField(
        required=False, min_value=0, max_value=100,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'placeholder': '0'})
    )

    score_max = forms.FloatField(
        required=False, min_value=0, max_value=100,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'placeholder': '100'})
    )

    def clean(self):
        cleaned_data = super().clean()
        score_min = cleaned_data.get('score_min')
        score_max = cleaned_data.get('score_max')

        if score_min is not None and score_max is not None and score_min > score_max:
            raise ValidationError(_('La puntuación mínima no puede ser mayor que la máxima'))

        return cleaned_data

    def get_score_range(self):
        score_min = self.cleaned_data.get('score_min')
        score_max = self.cleaned_data.get('score_max')

        if score_min is None and score_max is None:
            return None
        return (score_min if score_min is not None else 0, score_max if score_max is not None else 100)


class ProspectUpdateForm(forms.Form):
    """
    Quick edit of a prospect

    Every field is optional; changed_fields() returns only the ones that
    were actually sent.
    """

    name = forms.CharField(required=False, max_length=200)
    email = forms.EmailField(required=False)
    phone = forms.CharField(required=False, max_length=30)
    location = forms.CharField(required=False, max_length=200)
    status = forms.ChoiceField(required=False, choices=Prospect.STATUS_CHOICES)
    substatus = forms.ChoiceField(required=False, choices=Prospect.SUBSTATUS_CHOICES)

    def clean_name(self):
        name = self.cleaned_data.get('name', '')
        if 'name' in self.data and not name.strip():
            raise ValidationError(_('El nombre es obligatorio'))
        return name.strip()

    def clean_status(self):
        status = self.cleaned_data.get('status', '')
        if 'status' in self.data and not status:
            raise ValidationError(_('El estado es obligatorio'))
        return status

    def clean_email(self):
        email = self.cleaned_data.get('email')
        return email.strip().lower() if email else email

    def changed_fields(self):
        return {key: value for key, value in self.cleaned_data.items() if key in self.data}
