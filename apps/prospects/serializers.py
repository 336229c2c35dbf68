from rest_framework import serializers

from .models import Prospect


class ProspectFilterSerializer(serializers.Serializer):
    """Query parameters of the prospect listing"""

    query = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ListField(child=serializers.CharField(), required=False)
    score_min = serializers.FloatField(required=False, min_value=0, max_value=100)
    score_max = serializers.FloatField(required=False, min_value=0, max_value=100)

    def validate(self, attrs):
        score_min = attrs.get('score_min')
        score_max = attrs.get('score_max')
        if score_min is not None and score_max is not None and score_min > score_max:
            raise serializers.ValidationError('score_min cannot be greater than score_max')
        return attrs

    def to_filters(self):
        data = self.validated_data
        score_range = None
        if 'score_min' in data or 'score_max' in data:
            score_range = (data.get('score_min', 0), data.get('score_max', 100))

        return {
            'query': data.get('query'),
            'location': data.get('location'),
            'status': data.get('status'),
            'score_range': score_range,
        }


class ProspectUpdateSerializer(serializers.Serializer):
    """Editable prospect fields (PATCH)"""

    name = serializers.CharField(max_length=200)
    email = serializers.EmailField(allow_blank=True, allow_null=True)
    phone = serializers.CharField(max_length=30, allow_blank=True, allow_null=True)
    location = serializers.CharField(max_length=200, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(choices=Prospect.STATUS_CHOICES)
    substatus = serializers.ChoiceField(choices=Prospect.SUBSTATUS_CHOICES, allow_blank=True, allow_null=True)
