"""Configuration of the Cinema Management API.

- settings: environment driven settings, one class per environment
- dependencies: FastAPI dependencies for the JWT manager, the current user
  and role checks
- logging: dictConfig setup shared by every module logger
"""
