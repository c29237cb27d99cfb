"""
API layer for the authentication backend.

Exposes the registration, login and password reset endpoints under /api/auth
and the error translation shared by all of them.
"""
