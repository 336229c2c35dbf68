from rest_framework import serializers

from .models import Task


class TaskFilterSerializer(serializers.Serializer):

    query = serializers.CharField(required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=Task.TYPE_CHOICES, required=False, allow_blank=True)
    priority = serializers.ChoiceField(choices=Task.PRIORITY_CHOICES, required=False, allow_blank=True)


class TaskUpdateSerializer(serializers.Serializer):
    """Editable task fields (PATCH)"""

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(allow_blank=True, allow_null=True)
    due_date = serializers.DateField(allow_null=True)
    status = serializers.ChoiceField(choices=Task.STATUS_CHOICES)
    type = serializers.ChoiceField(choices=Task.TYPE_CHOICES, allow_null=True)
    priority = serializers.ChoiceField(choices=Task.PRIORITY_CHOICES, allow_null=True)
