from django.conf import settings
from rest_framework import serializers


class PaginationSerializer(serializers.Serializer):
    limit = serializers.IntegerField(
        required=False, min_value=1, max_value=getattr(settings, 'REGISTRY_MAX_PAGE_LIMIT', 100)
    )
    offset = serializers.IntegerField(required=False, min_value=0, default=0)

    def validate(self, attrs):
        attrs.setdefault('limit', getattr(settings, 'REGISTRY_DEFAULT_PAGE_LIMIT', 10))
        attrs.setdefault('offset', 0)
        return attrs
