from rest_framework import serializers

from .common import blank_to_none, clean_name, clean_text, optional_char


class HospitalSerializer(serializers.Serializer):
    """Create payload for a hospital; pass ``partial=True`` for updates."""
    name = serializers.CharField(
        min_length=2, max_length=255,
        error_messages={'min_length': 'Hospital name must be at least 2 characters'},
    )
    address = optional_char(255)
    phone = optional_char(32)
    email = serializers.EmailField(
        max_length=255, required=False, allow_blank=True, allow_null=True,
        error_messages={'invalid': 'Invalid email format'},
    )
    state = optional_char(255)
    localGovernment = optional_char(255, source='local_government')

    def validate_name(self, v):
        return clean_name(v, 'Hospital')

    def validate_address(self, v):
        return blank_to_none(clean_text(v))

    def validate_phone(self, v):
        return blank_to_none(clean_text(v))

    def validate_email(self, v):
        return blank_to_none(v)

    def validate_state(self, v):
        return blank_to_none(clean_text(v))

    def validate_localGovernment(self, v):
        return blank_to_none(clean_text(v))


class HospitalFilterSerializer(serializers.Serializer):
    state = serializers.CharField(required=False)
    localGovernment = serializers.CharField(required=False, source='local_government')
    adminId = serializers.IntegerField(required=False, source='admin_id')
