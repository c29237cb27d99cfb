# Standard library imports
import os
from typing import Final, List, Optional


def _env_bool(name: str, default: Optional[bool]) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_port(name: str) -> Optional[int]:
    raw = (os.getenv(name) or "").strip()
    if not raw.isdigit() or not 0 < int(raw) < 65536:
        return None
    return int(raw)


class Settings:
    """
    Application settings loaded from environment variables.

    Built once at process start and handed to the DI container, which passes
    it on to the components that need it (database, hasher, mail gateway).
    """

    def __init__(self) -> None:
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "auth_backend")

        # Credential Configuration
        self.bcrypt_rounds: Final[int] = int(os.getenv("BCRYPT_ROUNDS", "12"))
        self.reset_token_expire_minutes: Final[int] = int(
            os.getenv("RESET_TOKEN_EXPIRE_MINUTES", "60")
        )

        # SMTP Configuration
        self.smtp_host: Final[str] = os.getenv("SMTP_HOST", "")
        # Unset or malformed ports are reported by missing_smtp_settings()
        self.smtp_port: Final[Optional[int]] = _env_port("SMTP_PORT")
        self.smtp_user: Final[str] = os.getenv("SMTP_USER", "")
        self.smtp_password: Final[str] = os.getenv("SMTP_PASSWORD", "")
        self.smtp_timeout_seconds: Final[float] = float(os.getenv("SMTP_TIMEOUT_SECONDS", "10"))
        # Implicit TLS on 465, STARTTLS otherwise, unless SMTP_USE_TLS says so
        use_tls = _env_bool("SMTP_USE_TLS", None)
        self.smtp_use_tls: Final[bool] = use_tls if use_tls is not None else self.smtp_port == 465
        self.email_from: Final[str] = os.getenv("EMAIL_FROM", "") or self.smtp_user
        self.email_from_name: Final[str] = os.getenv("EMAIL_FROM_NAME", "Support Team")

        # Frontend used to build reset links
        self.frontend_url: Final[str] = os.getenv("FRONTEND_URL", "").rstrip("/")

        # HTTP Configuration
        self.cors_origins: Final[List[str]] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()

    def missing_smtp_settings(self) -> List[str]:
        """
        List the mail settings that must be present before a reset email can be sent

        Returns:
            Environment variable names that are unset (empty list when complete)
        """
        required = {
            "SMTP_HOST": self.smtp_host,
            "SMTP_PORT": self.smtp_port,
            "SMTP_USER": self.smtp_user,
            "SMTP_PASSWORD": self.smtp_password,
            "FRONTEND_URL": self.frontend_url,
        }
        return [name for name, value in required.items() if not value]


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
