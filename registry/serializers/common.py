import html

import bleach
from rest_framework import serializers


def clean_text(v):
    """Strip markup and surrounding whitespace from user supplied text.

    Tags are removed outright and entities are decoded again, so the
    stored value is plain text of no more than the submitted length.
    """
    if v is None:
        return None
    return html.unescape(bleach.clean(v.strip(), tags=set(), strip=True)).strip()


def clean_name(v, label, max_length=255):
    v = clean_text(v)
    if len(v) < 2:
        raise serializers.ValidationError(f'{label} name must be at least 2 characters')
    if len(v) > max_length:
        raise serializers.ValidationError(f'{label} name must be at most {max_length} characters')
    return v


def blank_to_none(v):
    if v is None:
        return None
    v = v.strip()
    return v or None


def optional_char(max_length, **kwargs):
    return serializers.CharField(
        max_length=max_length, required=False, allow_blank=True, allow_null=True, **kwargs
    )
