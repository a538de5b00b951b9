"""Marshmallow schemas."""
