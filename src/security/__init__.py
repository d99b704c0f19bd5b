"""Security module for the Cinema Management API.

The module includes:
- JWTManagerInterface: Abstract interface for JWT operations
- JWTManager: python-jose implementation issuing signed access tokens
- Password hashing and verification helpers backed by passlib/bcrypt
"""
