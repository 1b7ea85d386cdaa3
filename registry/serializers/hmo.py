from rest_framework import serializers

from .common import blank_to_none, clean_name, optional_char


class HmoSerializer(serializers.Serializer):
    name = serializers.CharField(
        min_length=2, max_length=255,
        error_messages={'min_length': 'HMO name must be at least 2 characters'},
    )
    code = optional_char(50)
    hospitalId = serializers.UUIDField(
        source='hospital_id', required=False, allow_null=True,
        error_messages={'invalid': 'Invalid hospital ID'},
    )
    logoUrl = serializers.URLField(
        source='logo_url', max_length=2048, required=False, allow_blank=True, allow_null=True,
        error_messages={'invalid': 'Invalid URL'},
    )

    def validate_name(self, v):
        return clean_name(v, 'HMO')

    def validate_code(self, v):
        # an empty code means "no code"; NULL keeps the unique index happy
        return blank_to_none(v)

    def validate_logoUrl(self, v):
        return blank_to_none(v)


class HmoFilterSerializer(serializers.Serializer):
    hospitalId = serializers.UUIDField(required=False, source='hospital_id')
    createdBy = serializers.IntegerField(required=False, source='created_by_id')
