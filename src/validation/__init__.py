"""Validation module for the Cinema Management API.

This module provides request body validation helpers shared by the
per-entity pydantic schemas:

- Formatting of request validation failures into a single message
- URL validation that keeps values as plain strings
- A builder deriving update schemas from create schemas
"""
from validation.requests import (
    format_validation_error,
    make_partial,
    validate_http_url
)
