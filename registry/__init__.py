"""Registry application for the healthcare admin backend.

This package contains the models, validation serializers, query classes,
actions and views behind the hospitals / HMOs / insurance plans
dashboard.
"""
