from rest_framework import serializers
from .models import Job
from apps.users.serializers import UserSummarySerializer
from core.constants import JOB_CATEGORY_CHOICES, JOB_STATUS_CHOICES
import logging

logger = logging.getLogger(__name__)


class LocationSerializer(serializers.Serializer):
    address = serializers.CharField(max_length=255)
    coordinates = serializers.ListField(
        child=serializers.FloatField(),
        min_length=2,
        max_length=2,
        error_messages={
            'min_length': 'Coordinates must be [longitude, latitude]',
            'max_length': 'Coordinates must be [longitude, latitude]',
        }
    )

    def validate_address(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Address may not be blank.")
        return value


class JobInputSerializer(serializers.Serializer):
    """Writable job fields, used for both create and (partial) update."""
    title = serializers.CharField(max_length=200)
    description = serializers.CharField()
    category = serializers.ChoiceField(choices=JOB_CATEGORY_CHOICES)
    reward = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    location = LocationSerializer()
    time_estimate = serializers.CharField(max_length=100)
    expires_at = serializers.DateTimeField(required=False)

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Title may not be blank.")
        return value

    def validate_location(self, value):
        # Partial updates skip required nested fields; a location is always replaced whole.
        missing = [name for name in ('address', 'coordinates') if name not in value]
        if missing:
            raise serializers.ValidationError({name: ["This field is required."] for name in missing})
        return value

    def to_model_fields(self):
        """Flatten validated data onto ``Job`` column names."""
        data = dict(self.validated_data)
        location = data.pop('location', None)
        if location is not None:
            data['address'] = location['address']
            data['longitude'], data['latitude'] = location['coordinates']
        return data


class JobSerializer(serializers.ModelSerializer):
    reward = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False, read_only=True)
    location = serializers.SerializerMethodField()
    created_by = UserSummarySerializer(read_only=True)
    assigned_to = UserSummarySerializer(read_only=True)
    completion_request = serializers.SerializerMethodField()

    class Meta:
        model = Job
        fields = [
            'id', 'title', 'description', 'category', 'reward', 'location',
            'time_estimate', 'status', 'created_by', 'assigned_to',
            'created_at', 'updated_at', 'expires_at', 'completed_at',
            'completion_request',
        ]
        read_only_fields = fields

    def get_location(self, obj):
        return {'address': obj.address, 'coordinates': obj.coordinates}

    def get_completion_request(self, obj):
        request = obj.completion_request
        if request is None:
            return None
        return {
            'comment': request['comment'],
            'submitted_at': serializers.DateTimeField().to_representation(request['submitted_at']),
        }


class JobFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=JOB_STATUS_CHOICES, required=False)
    category = serializers.ChoiceField(choices=JOB_CATEGORY_CHOICES, required=False)
    created_by = serializers.IntegerField(required=False)
    assigned_to = serializers.IntegerField(required=False)
    expires_before = serializers.DateTimeField(required=False)
    expires_after = serializers.DateTimeField(required=False)
    mine = serializers.BooleanField(required=False, default=False)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500, default=100)
    offset = serializers.IntegerField(required=False, min_value=0, default=0)

