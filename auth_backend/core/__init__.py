from .config import Settings, get_settings
from .security import PasswordHasher, generate_reset_token
from .logging_config import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "PasswordHasher",
    "generate_reset_token",
    "configure_logging",
]
