from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .common import clean_text


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField()

    def validate_email(self, v):
        v = (v or '').strip().lower()
        if not v:
            raise serializers.ValidationError('Email is required')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=255,
                                 error_messages={'min_length': 'Name must be at least 2 characters'})
    email = serializers.EmailField(max_length=254, error_messages={'invalid': 'Invalid email format'})
    password = serializers.CharField(min_length=8, write_only=True,
                                     error_messages={'min_length': 'Password must be at least 8 characters'})

    def validate_name(self, v):
        return clean_text(v)

    def validate_email(self, v):
        return v.strip().lower()

    def validate_password(self, v):
        validate_password(v)
        return v
