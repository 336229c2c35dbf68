from django import forms
from django.utils.translation import gettext_lazy as _

from .models import Task


class TaskFilterForm(forms.Form):

    query = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Buscar por título, descripción o prospecto'),
        })
    )

    type = forms.ChoiceField(
        required=False,
        choices=[('', _('Todos los tipos'))] + Task.TYPE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    priority = forms.ChoiceField(
        required=False,
        choices=[('', _('Todas las prioridades'))] + Task.PRIORITY_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'})
    )


class TaskUpdateForm(forms.Form):
    """Quick edit of a task; only the submitted fields are returned by changed_fields()."""

    title = forms.CharField(required=False, max_length=200)
    description = forms.CharField(required=False)
    due_date = forms.DateField(required=False)
    status = forms.ChoiceField(required=False, choices=Task.STATUS_CHOICES)
    type = forms.ChoiceField(required=False, choices=Task.TYPE_CHOICES)
    priority = forms.ChoiceField(required=False, choices=Task.PRIORITY_CHOICES)

    def clean(self):
        cleaned_data = super().clean()
        # Sent keys of these fields cannot be blanked
        for field in ('title', 'status', 'type', 'priority'):
            if field in self.data and field in cleaned_data and not str(cleaned_data[field]).strip():
                self.add_error(field, _('Este campo no puede estar vacío'))
        return cleaned_data

    def changed_fields(self):
        return {key: value for key, value in self.cleaned_data.items() if key in self.data}
