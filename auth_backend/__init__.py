"""Authentication backend: registration, login and password reset."""

__version__ = "1.0.0"
